"""Version information for volley_tracker."""

__version__ = "0.3.0"
__author__ = "Volley Tracker Team"
__email__ = "dev@volleytracker.local"
