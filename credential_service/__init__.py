"""
Credential service.

Account registration and login exposed over a message-pattern transport.
"""
