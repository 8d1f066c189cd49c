# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for sgres.

Configuration, the exception hierarchy, structured logging, and the
help formatter shared by the command-line interface.
"""
