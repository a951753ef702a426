"""ticketlink: a health-checked ServiceNow change-request adapter."""

__version__ = "0.1.0"
