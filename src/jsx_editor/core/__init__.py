"""
Core Package.

Contains the tree model, the JSX parser and serializer, and the style resolver.
"""
