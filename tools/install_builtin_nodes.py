import argparse
import json
import os
from typing import List, Optional

from dotenv import load_dotenv

from wigle_nodes.registry import builtin_specs, install_nodes, list_nodes


def dump_specs(out_dir: str) -> int:
    os.makedirs(out_dir, exist_ok=True)
    specs = builtin_specs()
    for spec in specs:
        path_out = os.path.join(out_dir, f"{spec['name']}.json")
        with open(path_out, "w", encoding="utf-8") as f:
            json.dump(spec, f, indent=2, ensure_ascii=False)
    return len(specs)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Install the bundled WiGLE node declarations into the node registry")
    ap.add_argument("--list", action="store_true", help="Print the installed nodes as JSON and exit")
    ap.add_argument("--out", help="Write the node declarations as JSON files into this directory instead of installing")
    args = ap.parse_args(argv)

    load_dotenv(override=False)
    if args.list:
        print(json.dumps(list_nodes(), indent=2, default=str))
        return 0
    if args.out:
        n = dump_specs(args.out)
        print(f"Wrote {n} nodes into {args.out}")
        return 0

    specs = builtin_specs()
    install_nodes(specs)
    print(f"Installed nodes: {len(specs)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
