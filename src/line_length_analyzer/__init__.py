"""Line-length analyzer with a fix convergence verification harness."""

__version__ = "0.1.0"
