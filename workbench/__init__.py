"""
Agent Workbench - client-side state layer for the support console
"""
__version__ = "0.1.0"
