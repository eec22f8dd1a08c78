from pathlib import Path
import hashlib

def file_leaf(rel_path: str, content: bytes) -> bytes:
    h = hashlib.sha256()
    h.update(rel_path.encode("utf-8"))
    h.update(b"\x00")
    h.update(len(content).to_bytes(8, "big"))
    h.update(content)
    return h.digest()

def integrity_root(root_dir: Path, rel_files: list[str]) -> str:
    """sha256 over the leaf digests of rel_files in sorted order."""
    acc = hashlib.sha256()
    for rel in sorted(rel_files):
        acc.update(file_leaf(rel, (root_dir / rel).read_bytes()))
    return acc.hexdigest()

def looks_like_parquet(p: Path) -> bool:
    b = p.read_bytes()
    return len(b) >= 8 and b.startswith(b"PAR1") and b.endswith(b"PAR1")
