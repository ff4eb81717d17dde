"""
Test cases for the 2D Euler flux and boundary kernels.

Run tests with pytest:
    pytest euler2d/tests/ -v

Or run individual test files:
    pytest euler2d/tests/test_boundary.py -v
"""
