"""Statistical outlier removal for 3D point sets."""
