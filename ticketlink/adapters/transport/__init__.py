"""Transport adapters performing raw requests against ticketing systems.

Implementations:
- ServiceNow (Table API over HTTPS with basic auth)
"""
