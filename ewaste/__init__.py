# ==============================================
# E-Waste Hub — domain core
# ==============================================
#
# Package Structure:
#
# ewaste/
# ├── persistence/      # Key-value storage (JSON files or MongoDB)
# ├── domain/           # Identities, classification records, listings
# ├── stores/           # Session, classification and marketplace stores
# ├── analysis/         # Derived aggregation for dashboards and search
# ├── calculator.py     # Per-user carbon calculator state
# ├── config.py         # Configuration management
# ├── context.py        # Application context (wires every service once)
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
