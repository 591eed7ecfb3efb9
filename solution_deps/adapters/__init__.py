"""
Adapters

Inbound: scan loading and the console display.
Outbound: JSON / CSV export.
"""
