"""
HotWheels API — Routes Package

Route Inventory:
    - catalog.py:  GET /{full_path:path}  (list, detail or welcome, by path segments)
"""
