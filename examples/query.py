"""Query a sweep table - look up fib(k) and its neighbours."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <sweep_path> <index>")
        print("Example: python query.py sweep/ 10")
        sys.exit(1)

    sweep = Path(sys.argv[1])
    index = int(sys.argv[2])

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW seq AS SELECT * FROM '{sweep}/table/sequence.parquet'")

    sql = """
    SELECT "index", value, text
    FROM seq
    WHERE "index" BETWEEN ? - 2 AND ?
    ORDER BY "index"
    """

    print(f"--- fib({index}) and the two terms before it ---\n")

    df = con.execute(sql, [index, index]).fetchdf()
    if df.empty:
        print("Index not present in this sweep.")
        sys.exit(1)
    for _, row in df.iterrows():
        print(f"fib({row['index']}) = {row['text']}")


if __name__ == "__main__":
    main()
