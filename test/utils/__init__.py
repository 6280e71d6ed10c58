""" Utilities for testing. """

from ._generate_points import *
