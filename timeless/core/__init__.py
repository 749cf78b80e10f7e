"""
Core infrastructure: exceptions, logging, paths, configuration, CLI helpers.
"""
