"""
Application infrastructure shared by the pipeline and the CLI.
"""
