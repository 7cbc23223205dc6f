"""Domain layer for taskman.

Pure models and rules for tasks and categories. Nothing in this
package performs I/O.
"""
