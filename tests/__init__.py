"""
Test package for minfs.

This package contains all the test cases for the minfs mount configuration.
"""

import os

# Add the src directory to the path so we can import the package during testing
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
