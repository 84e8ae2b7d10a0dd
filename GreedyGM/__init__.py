"""
GreedyGM
Greedy selection of ground motion records matching a target response spectrum distribution
"""

__version__ = '0.1.0'
