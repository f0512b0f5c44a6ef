from .realmcore.errors import ConfigFileNotFound
from .realmcore.utils import mask
from .support import config_paths, scan_config

def run_doctor(args):
    ok = True
    print("realm doctor:")

    for path in ([args.config] if args.config else config_paths()):
        if path.is_file():
            print(f"  ✔ {path} exists")
        else:
            print(f"  ✘ {path} does not exist")

    try:
        found, result = scan_config(args.config, **args.scan_options)
    except ConfigFileNotFound as e:
        print(f"  ✘ {e}")
        return 1

    print(f"  ✔ read {result.lines_read} lines of {found}")
    for e in result.skipped:
        ok = False
        print(f"  ✘ skipped {e}")
    cred = result.cred
    for name in ("rpcconnect", "rpcuser", "rpcpassword"):
        value = getattr(cred, name)
        if value is None:
            ok = False
            print(f"  ✘ {found} missing {name}")
        else:
            shown = mask(value) if name == "rpcpassword" else value
            print(f"  ✔ {found} defines {name}: {shown}")
    return 0 if ok else 1
