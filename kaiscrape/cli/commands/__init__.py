"""
CLI Commands - Command implementations registered by ``cli.main``.
"""
