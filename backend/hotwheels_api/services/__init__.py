"""
HotWheels API — Services Layer

Service Inventory:
    - path_router:        path → RouteIntent (list / detail / default)
    - record_transformer: raw catalog row → client record (pure)
    - catalog_service:    the list and detail queries
"""
