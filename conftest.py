"""Configure test suite environment"""
import os
import sys

# Add the project root directory to the Python path so `src` imports resolve
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)
