"""
flow-migrate - One-shot Flow to TypeScript package migration.

Runs a fixed pipeline against one package directory: validate the path, check
for the package manager and converter, drive the interactive converter, then
swap @babel/runtime for tslib and patch .npmignore and package.json.
"""

__version__ = "0.1.0"
