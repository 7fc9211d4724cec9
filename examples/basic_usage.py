#!/usr/bin/env python3
"""
Basic usage example for the ConfStore module.
"""
import tempfile
from pathlib import Path

from ConfStore import Config, ini_codec, json_codec
from ConfStore.utils import format_json

def main():
    """Main function."""
    work_dir = Path(tempfile.mkdtemp())

    # Create a Config stored in a scratch directory
    config = Config("demo", directory=work_dir)
    config.set("name", "demo")
    config.set("server.host", "localhost")
    config.set("server.ports", ["8080", "8443"])
    config.set("server.tls.enabled", True)
    print(f"{config.dirty} keys changed since the last save")

    # Save as INI and show the file
    config.save()
    print(f"\nSaved to {config.path}:")
    print(config.path.read_text(encoding="utf-8"))

    # Load it back and read values
    loaded = Config.load("demo", directory=work_dir)
    print(f"server.host = {loaded.get('server.host')}")
    print(f"server.tls.enabled = {loaded.get('server.tls.enabled')}")

    # Save the same data as JSON
    json_path = work_dir / "config.json"
    loaded.save(json_path, indent=2)
    print(f"\nSaved to {json_path}:")
    print(json_path.read_text(encoding="utf-8"))

    # Use the codecs directly
    store = ini_codec.decode("[db]\nhost=localhost\nreplicas[]=a\nreplicas[]=b\n")
    print("\nDecoded INI as JSON:")
    print(json_codec.encode(store))
    print(format_json(store.to_dict()))

if __name__ == "__main__":
    main()
