"""Zhipu GLM prompt assistant"""

__version__ = "0.1.0"
