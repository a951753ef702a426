"""External adapters for the ticketlink change-ticket adapter.

This package contains all external dependencies (httpx, ServiceNow)
and provides implementations of the core port interfaces.

Adapter Organization:

- transport/: Authenticated HTTP connectors to ticketing systems
"""
