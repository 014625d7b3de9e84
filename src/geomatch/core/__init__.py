"""Core domain package for geomatch.

Core contains the rule model, the matchers and the builder without any
dataset file format or CLI code, keeping the matching logic portable.
"""
