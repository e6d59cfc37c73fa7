#!/usr/bin/env python3
"""Standalone chat relay — run chat-relay as an HTTP server.

    cd samples/chat
    poetry run python app.py

Requires a reachable MongoDB (MONGODB_CONNECTION) unless CHAT_STORE=memory.
Starts on http://localhost:8080.

Environment variables:
    MONGODB_CONNECTION  — MongoDB connection string
    CHAT_STORE          — Set to memory to run without MongoDB
    PORT                — Server port (default: 8080)
"""
from chat_relay.standalone import main

if __name__ == "__main__":
    main()
