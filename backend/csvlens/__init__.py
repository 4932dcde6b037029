"""
CSV Lens - data profiling and rule-based cleaning for tabular uploads.
"""
from csvlens.core.profiler import profile
from csvlens.cleaners.data_cleaner import clean

__all__ = ["profile", "clean"]
