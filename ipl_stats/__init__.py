"""IPL Stats gateway: cached, fault-tolerant aggregation of cricket data."""
