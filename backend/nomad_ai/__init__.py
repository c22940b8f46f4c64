"""
Generative features of the digital nomad planner
"""
__version__ = "0.1.0"
