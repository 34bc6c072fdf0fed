"""
Domain layer for tablefs.

=== PURPOSE ===
Holds everything that does not depend on a concrete database:
- BinaryEntry: one stored file (row of the binaries table)
- StorageKey: (directory, name) pair identifying a file
- BinaryRepository: persistence boundary implemented by infrastructure
- Path strategies: flat vs prefixed path codecs
- Error taxonomy shared by the adapter and the stores
"""
