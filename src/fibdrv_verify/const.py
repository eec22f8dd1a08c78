ERRORS = {
  "E_LAYOUT_MISSING": "Required file or directory missing",
  "E_MANIFEST_JSON": "Manifest JSON invalid",
  "E_INTEGRITY_MISMATCH": "Integrity root does not match manifest",
  "E_PARQUET_MAGIC": "Parquet file missing PAR1 magic bytes",
  "E_TABLE_UNREADABLE": "Sweep table cannot be read as sequence rows",
  "E_INDEX_GAP": "Sequence indices are not contiguous from 0 to max_index",
  "E_TEXT_MISMATCH": "Rendered decimal text does not match the value",
  "E_SEQUENCE_MISMATCH": "Value breaks the wraparound Fibonacci recurrence",
}

SWEEP_TABLE = "table/sequence.parquet"
MANIFEST = "manifest.json"
