"""
Progress feedback for the greedy subset modification procedure
"""

# Import python libraries
import tqdm


class ProgressReporter:
    """
    Receives progress signals from the optimizer. The base class is silent.
    """

    def slot_done(self, pass_number, slot, num_passes, num_slots):
        """
        Called after the record at slot (from 0) has been replaced during pass pass_number (from 1).
        """

    def pass_done(self, pass_number, median_error, std_error):
        """
        Called after each pass with the max percent errors in median and standard deviation.
        """

    def close(self):
        """
        Called once the optimization is over.
        """


class TqdmProgress(ProgressReporter):
    """
    Shows a console progress bar over all (pass, slot) updates.
    """

    def __init__(self, desc='Optimizing ground motion selection', **kwargs):
        self.desc = desc
        self.kwargs = kwargs
        self.bar = None

    def slot_done(self, pass_number, slot, num_passes, num_slots):
        if self.bar is None:
            self.bar = tqdm.tqdm(total=num_passes * num_slots, desc=self.desc, **self.kwargs)
        self.bar.update(1)

    def pass_done(self, pass_number, median_error, std_error):
        tqdm.tqdm.write(f'Max (across periods) error in median = {median_error:.1f} percent')
        tqdm.tqdm.write(f'Max (across periods) error in standard deviation = {std_error:.1f} percent')

    def close(self):
        if self.bar is not None:
            self.bar.close()
            self.bar = None
