"""
Histogram Texture Statistics — first-order texture descriptors for images.

Computes mean, standard deviation, relative smoothness, skewness, kurtosis,
uniformity, and normalized entropy from the intensity histogram of an
8- or 16-bit image region (optionally restricted by a rectangle and a
binary mask).
"""

__version__ = "1.0.0"
