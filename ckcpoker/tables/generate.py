"""
Pre-generate the lookup tables.

Writes the built tables to a compressed NumPy archive so that processes can
load them (``CKCPOKER_TABLE_PATH``) instead of enumerating every hand on
startup.

Usage:
    python -m ckcpoker.tables.generate --output tables.npz
"""

import argparse
import logging
import time
import zipfile

import numpy as np

from ..categories import HandCategory
from ..errors import TableConstructionError
from .builder import LookupTables, _frozen, build_tables, category_bounds, verify_tables

logger = logging.getLogger(__name__)

_ARRAYS = ("flush", "unique_values", "unique_keys", "displacements", "signatures")
_DTYPES = {
    "flush": np.uint16,
    "unique_values": np.uint16,
    "unique_keys": np.uint32,
    "displacements": np.int32,
    "signatures": np.uint8,
}


def save_tables(tables: LookupTables, path) -> None:
    """Write ``tables`` to ``path`` as a compressed ``.npz`` archive."""
    np.savez_compressed(path, **{name: getattr(tables, name) for name in _ARRAYS})
    logger.info("Saved lookup tables to %s", path)


def load_tables(path) -> LookupTables:
    """
    Load and verify tables written by ``save_tables``.

    Args:
        path: Archive path

    Returns:
        Read-only LookupTables

    Raises:
        TableConstructionError: the archive is missing, unreadable or does
            not hold valid tables
    """
    try:
        with np.load(path, allow_pickle=False) as archive:
            arrays = {}
            for name in _ARRAYS:
                if name not in archive.files:
                    raise TableConstructionError(f"{path}: missing array {name!r}")
                arrays[name] = _frozen(np.ascontiguousarray(archive[name], dtype=_DTYPES[name]))
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        logger.critical("Could not read lookup tables from %s: %s", path, e)
        raise TableConstructionError(f"Could not read lookup tables from {path}: {e}") from e

    tables = LookupTables(bounds=category_bounds(), **arrays)
    verify_tables(tables)
    logger.info("Loaded lookup tables from %s", path)
    return tables


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate poker hand lookup tables")
    parser.add_argument("--output", required=True, help="Path of the .npz archive to write")
    parser.add_argument("--max-displacement", type=int, default=1_000_000,
                        help="Upper bound on the perfect hash displacement search")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    start = time.time()
    tables = build_tables(args.max_displacement)
    save_tables(tables, args.output)

    print(f"Wrote {args.output} in {time.time() - start:.2f}s")
    print(f"  flush entries:  {int(np.count_nonzero(tables.flush))}")
    print(f"  unique entries: {tables.unique_values.shape[0]}")
    for category in HandCategory:
        first, last = tables.bounds[category]
        print(f"  {category.label:<16} {first:>5} - {last:<5}")


if __name__ == "__main__":
    main()
