import sys
from pathlib import Path

def main():
    if len(sys.argv) != 4:
        print("Usage: inject_junk.py <file> <offset> <count>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    offset = int(sys.argv[2])
    count = int(sys.argv[3])
    b = bytearray(p.read_bytes())
    if offset < 0 or offset > len(b):
        print(f"Offset {offset} outside file of {len(b)} bytes.")
        raise SystemExit(2)

    # Zero bytes never form the object magic, so a decoder must skip exactly `count` bytes.
    b[offset:offset] = b"\x00" * count
    p.write_bytes(bytes(b))
    print(f"Injected {count} junk bytes at offset {offset} in {p}")

if __name__ == "__main__":
    main()
