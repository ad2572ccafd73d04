"""External adapters for the hbreport notifier.

Adapters implement the core port interfaces on top of third-party
libraries.

Adapter Organization:

- transport/: Adapters for delivering notices over the network (httpx)
"""
