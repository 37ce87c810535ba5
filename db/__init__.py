"""
db/ - Database Layer
====================
Handles all MySQL connections and schema initialization.
This layer sits below the application code; it only depends on config, models and security.
"""
