from __future__ import annotations
import logging
from typing import Dict, Tuple

from .cursor import Cursor
from .flag_plan import FlagPlan, build_plan, decode_word, field, flag
from ..fmt import hex_str
from unxbits.models.word import DecodedWord

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    pass


# ---- MS-OSHARED 2.3.7.1 Hyperlink Object, 4-byte attribute word ----
# A..J at bits 0..9; reserved (22 bits) MUST be zero.
HYPERLINK_FLAGS: FlagPlan = build_plan("hyperlink", 32, (
    flag("hlstmfHasMoniker",          0),  # A
    flag("hlstmfIsAbsolute",          1),  # B
    flag("hlstmfSiteGaveDisplayName", 2),  # C
    flag("hlstmfHasLocationStr",      3),  # D
    flag("hlstmfHasDisplayName",      4),  # E
    flag("hlstmfHasGUID",             5),  # F
    flag("hlstmfHasCreationTime",     6),  # G
    flag("hlstmfHasFrameName",        7),  # H
    flag("hlstmfMonikerSavedAsStr",   8),  # I
    flag("hlstmfAbsFromGetdataRel",   9),  # J
))

# ---- MS-OSHARED 2.3.7.7 URICreateFlags ----
# A..P at bits 0..15; reserved (16 bits).
URI_CREATE_FLAGS: FlagPlan = build_plan("uricreateflags", 32, (
    flag("createAllowRelative",               0),
    flag("createAllowImplicitWildcardScheme", 1),
    flag("createAllowImplicitFileScheme",     2),
    flag("createNoFrag",                      3),
    flag("createNoCanonicalize",              4),
    flag("createCanonicalize",                5),
    flag("createFileUseDosPath",              6),
    flag("createDecodeExtraInfo",             7),
    flag("createNoDecodeExtraInfo",           8),
    flag("createCrackUnknownSchemes",         9),
    flag("createNoCrackUnknownSchemes",      10),
    flag("createPreProcessHtmlUri",          11),
    flag("createNoPreProcessHtmlUri",        12),
    flag("createIESettings",                 13),
    flag("createNoIESettings",               14),
    flag("createNoEncodeForbiddenCharacters", 15),
))

# ---- BIFF8 2.5.20 CellXF, trailing fill-pattern word ----
CELL_XF_FILL: FlagPlan = build_plan("cellxf_fill", 16, (
    field("icvFore", 0, 6),    # 7 bits
    field("icvBack", 7, 13),   # 7 bits
    flag("fsxButton", 14),
    # Q - reserved3 (bit 15)
))

# ---- BIFF8 2.5.27 CFExNonCF12, rule option byte ----
CF_RULE_OPTIONS: FlagPlan = build_plan("cf_rule_options", 8, (
    flag("fActive",     0),  # A
    flag("fStopIfTrue", 1),  # B
    # C reserved1, D unused, E reserved2 (4 bits)
))

PLANS: Dict[str, FlagPlan] = {
    p.name: p for p in (HYPERLINK_FLAGS, URI_CREATE_FLAGS, CELL_XF_FILL, CF_RULE_OPTIONS)
}


def _word(cur: Cursor, plan: FlagPlan) -> DecodedWord:
    nbytes = plan.width_bits // 8
    if cur.remaining() < nbytes:
        raise DecodeError(f"{plan.name}: need {nbytes} bytes, have {cur.remaining()}")
    return decode_word(cur.word(nbytes), plan)


def decode_named(name: str, data: bytes) -> DecodedWord:
    """Decode one little-endian word from `data` with the plan called `name`."""
    plan = PLANS.get(name)
    if plan is None:
        raise DecodeError(f"unknown plan {name!r}; known: {', '.join(sorted(PLANS))}")
    logger.debug("decode %s from [%s]", name, hex_str(data))
    cur = Cursor(data)
    out = _word(cur, plan)
    if cur.remaining():
        logger.warning("%s: %d trailing bytes ignored", name, cur.remaining())
    return out


def decode_hyperlink_header(cur: Cursor) -> Tuple[int, DecodedWord]:
    """
    Hyperlink Object prefix: streamVersion (4 bytes) then the attribute word.
    Leaves the cursor at the first optional HyperlinkString.
    """
    if cur.remaining() < 8:
        raise DecodeError(f"hyperlink: need 8 bytes, have {cur.remaining()}")
    stream_version = cur.u32()
    flags = _word(cur, HYPERLINK_FLAGS)
    if flags["hlstmfMonikerSavedAsStr"] and not flags["hlstmfHasMoniker"]:
        logger.warning("hyperlink: hlstmfMonikerSavedAsStr set without hlstmfHasMoniker")
    return stream_version, flags


def decode_uri_create_flags(data: bytes) -> DecodedWord:
    return decode_named(URI_CREATE_FLAGS.name, data)


def decode_cell_xf_fill(data: bytes) -> DecodedWord:
    return decode_named(CELL_XF_FILL.name, data)


def decode_cfex_noncf12_header(cur: Cursor) -> dict:
    """
    Fixed 8-byte head of CFExNonCF12:
    icf u16, cp u8, icfTemplate u8, ipriority u16, options u8, fHasDXF u8.
    """
    start = cur.tell()
    if cur.remaining() < 8:
        raise DecodeError(f"CFExNonCF12: need 8 bytes at {start}, have {cur.remaining()}")
    icf = cur.u16()
    cp = cur.u8()
    icf_template = cur.u8()
    ipriority = cur.u16()
    options = _word(cur, CF_RULE_OPTIONS)
    f_has_dxf = cur.u8()

    return {
        "icf": icf, "cp": cp, "icfTemplate": icf_template, "ipriority": ipriority,
        "fActive": options["fActive"], "fStopIfTrue": options["fStopIfTrue"],
        "fHasDXF": f_has_dxf == 1,
    }
