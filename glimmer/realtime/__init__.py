"""Real-time layer: WebSocket connection registry, message protocol and relay.

Import submodules directly (``glimmer.realtime.registry``,
``glimmer.realtime.protocol``, ``glimmer.realtime.relay``); the relay depends
on the server services, which in turn use the registry and protocol.
"""
