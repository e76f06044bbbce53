"""
ResX Engine host application layer.

Package layout:
    services/   Host services (Qt event bus bridge)
    paths.py    Per-user config and data locations
    main.py     Console entry point
"""
