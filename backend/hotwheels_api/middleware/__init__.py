"""
HotWheels API — Middleware Package

Chain:
    Request → [Request ID] → [Access Logging] → catalog route
"""
