# ==============================================
# ORM Explorer
# ==============================================
#
# Package Structure (4 Topics + Demo):
#
# orm_explorer/
# ├── mapping/      # Topic 1: Copy fields between records by name
# ├── models/       # Topic 2: Dataclass models + table metadata
# ├── storage/      # Topic 3: MySQL connection and queries
# ├── fixtures/     # Topic 4: YAML fixture loading
# ├── config.py     # Configuration management
# ├── demo.py       # Demo orchestrator
# └── cli.py        # Command line entry point
#
# ==============================================

from orm_explorer.mapping import map_structs, MismatchPolicy, StructMapper

__version__ = "0.1.0"

__all__ = ["map_structs", "MismatchPolicy", "StructMapper"]
