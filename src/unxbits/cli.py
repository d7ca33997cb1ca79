from __future__ import annotations
import argparse, json, logging, sys

from .binary.bitops import BitOps, WORD_BITS
from .binary.fmt import bin_, set_bits
from .binary.selector import BitRange

logger = logging.getLogger(__name__)


def word_arg(value: str) -> BitOps:
    """Parse a word in any base (0x.., 0b.., 0o.., decimal)."""
    try:
        return BitOps(int(value, 0))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid word {value!r}: {e}")

def int_arg(value: str) -> int:
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value}")


def cmd_bit(args):
    print(json.dumps(args.word.set_at(args.index)))

def cmd_field(args):
    print(json.dumps(args.word.value_at(BitRange.inclusive(args.lo, args.hi))))

def cmd_inspect(args):
    w: BitOps = args.word
    if w.bits >> args.width:
        logger.warning("word 0x%x does not fit in %d bits", w.bits, args.width)
    print(f"hex: 0x{w.bits:0{(args.width + 3) // 4}x}")
    print(f"bin: {bin_(w.bits, args.width)}")
    print(f"set: {set_bits(w.bits)}")

def cmd_decode(args):
    from .binary.codecs.structures import decode_named
    try:
        data = bytes.fromhex(args.data)
    except ValueError:
        print(f"error: not a hex byte string: {args.data!r}", file=sys.stderr)
        return 2
    out = decode_named(args.plan, data)
    print(json.dumps(out.model_dump(mode="json"), indent=2))

def cmd_plans(args):
    from .binary.codecs.structures import PLANS
    for name, plan in sorted(PLANS.items()):
        print(f"{name:<16} {plan.width_bits:>2} bits  {', '.join(f.name for f in plan.fields)}")


def build_parser():
    p = argparse.ArgumentParser(prog="unxbits", description="Packed binary record bit-field utilities")
    p.add_argument(
        "--loglevel",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Provide logging level. Example --loglevel debug, default=warning",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("bit", help="test one bit (true/false/null)")
    sp.add_argument("word", type=word_arg)
    sp.add_argument("index", type=int_arg)
    sp.set_defaults(func=cmd_bit)

    sp = sub.add_parser("field", help="extract bits LO..HI inclusive, right-aligned")
    sp.add_argument("word", type=word_arg)
    sp.add_argument("lo", type=int_arg)
    sp.add_argument("hi", type=int_arg)
    sp.set_defaults(func=cmd_field)

    sp = sub.add_parser("inspect", help="show a word in hex/binary and list its set bits")
    sp.add_argument("word", type=word_arg)
    sp.add_argument("--width", type=int, default=WORD_BITS, choices=[8, 16, 32, 64])
    sp.set_defaults(func=cmd_inspect)

    sp = sub.add_parser("decode", help="decode a record word with a named flag plan")
    sp.add_argument("plan")
    sp.add_argument("data", help="little-endian bytes as hex, e.g. 01800000")
    sp.set_defaults(func=cmd_decode)

    sp = sub.add_parser("plans", help="list known flag plans")
    sp.set_defaults(func=cmd_plans)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, ns.loglevel.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return ns.func(ns) or 0
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
