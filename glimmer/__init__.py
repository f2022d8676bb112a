"""Glimmer: memories, a shared cosmic pet, friends, chat and mini-games.

Subpackages:
- core: logging, monitoring, database layer and shared models
- ai: text generation providers and the cosmic assistant
- games: pure turn-based game engines
- realtime: WebSocket connection registry, message protocol and relay
- server: FastAPI application, routers and services
"""
