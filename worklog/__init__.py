"""
Personal work log tracker: flat JSON file store and REST API.
"""
