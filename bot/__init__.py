"""
Transport wiring for the command bot: config, database, Discord client and keep-alive server.
"""
