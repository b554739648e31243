"""
Test suite for earthshape

To run all tests:
    python -m pytest src/earthshape/tests/ -v

To run specific test file:
    python -m pytest src/earthshape/tests/test_curvature.py -v
"""
