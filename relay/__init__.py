"""
EODSA relay - room membership and fan-out for live event production clients
"""
