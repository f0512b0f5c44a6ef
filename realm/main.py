"""
The realm program: read rpc credentials from bitcoin.conf and talk to the node.
"""
import argparse
import sys
import pathlib

from .doctor import run_doctor
from .rpc import RpcClient
from .support import load_credentials, scan_config
from .realmcore.constants import VERSION, PROGRAM_NAME, DEFAULT_RPC_TIMEOUT_S
from .realmcore.errors import RealmError
from .realmcore.scanner import MergePolicy, MalformedPolicy
from .realmcore.utils import get_logger, set_debug, mask

# because of our argument processing, args is typically given and frequently not used.
# pylint: disable=unused-argument

__version__ = VERSION

logger = get_logger()

def scan_options(args):
    return {'policy': MergePolicy.UNGATED if args.ungated else MergePolicy.GATED,
            'on_malformed': MalformedPolicy.ABORT if args.abort_on_malformed else MalformedPolicy.SKIP,
            'strict': args.strict}

def rpc_client(args):
    cred = load_credentials(args.config, **args.scan_options)
    return RpcClient.from_creds(cred, timeout=args.timeout)

def do_version(args):
    print("version",__version__)
    return 0

def do_config(args):
    found, result = scan_config(args.config, **args.scan_options)
    cred = result.cred
    print(f"Configuration from {found}:")
    print(f"rpcconnect = {cred.rpcconnect if cred.rpcconnect is not None else '<unset>'}")
    print(f"rpcuser = {cred.rpcuser if cred.rpcuser is not None else '<unset>'}")
    print(f"rpcpassword = {mask(cred.rpcpassword)}")
    if not result.done:
        print(f"ERROR: missing {', '.join(result.missing())}")
        return 1
    return 0

def do_get_block_count(args):
    print(rpc_client(args).get_block_count())
    return 0

def do_get_block_hash(args):
    print(rpc_client(args).get_block_hash(args.height))
    return 0

def do_get_block_outs(args):
    print(rpc_client(args).get_block_outs(args.height))
    return 0

def height(value):
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("height must be >= 0")
    return n

def make_parser():
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME,
                                     description='Query a bitcoin node using the credentials in bitcoin.conf')
    parser.add_argument("--debug", help='Run in debug mode', action='store_true')
    parser.add_argument("--config", help='Config file to use instead of searching for bitcoin.conf',
                        type=pathlib.Path)
    parser.add_argument("--ungated", help='Legacy mode: also take credentials from the [test] section',
                        action='store_true')
    parser.add_argument("--strict", help='Report mistyped rpc keys such as rpc_user=', action='store_true')
    parser.add_argument("--abort-on-malformed", help='Stop at the first unreadable line instead of skipping it',
                        action='store_true')
    parser.add_argument("--timeout", help='RPC timeout in seconds', type=float, default=DEFAULT_RPC_TIMEOUT_S)
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('version', help='Print the version').set_defaults(func=do_version)
    subparsers.add_parser('config', help='Show the credentials found in the config file').set_defaults(func=do_config)
    subparsers.add_parser('doctor', help='Self-test the configuration').set_defaults(func=run_doctor)
    subparsers.add_parser('get-block-count', help='Print the height of the best chain').set_defaults(func=do_get_block_count)

    # realm get-block-hash HEIGHT
    p = subparsers.add_parser('get-block-hash', help='Print the hash of the block at a height')
    p.add_argument(dest='height', help='Block height', type=height)
    p.set_defaults(func=do_get_block_hash)

    # realm get-block-outs HEIGHT
    p = subparsers.add_parser('get-block-outs', help='Print the number of outputs in the block at a height')
    p.add_argument(dest='height', help='Block height', type=height)
    p.set_defaults(func=do_get_block_outs)
    return parser

def main(argv=None):
    args = make_parser().parse_args(argv)
    if args.debug:
        set_debug()
    args.scan_options = scan_options(args)
    try:
        return args.func(args)
    except RealmError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
