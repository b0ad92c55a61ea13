"""
API routers for plotlab
"""
