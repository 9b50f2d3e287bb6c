"""
Welsh digraph splitting.

Splits a word into its orthographic units: the digraphs
ch, dd, ff, ng, ll, ph, rh, th, or single letters. Which digraphs are
merged depends on the lemma:

  * lemmas in DONT_SPLIT_RH: every digraph is merged, rh included.
  * lemmas in SPLIT_NG, or matching _SPLIT_NG_PATTERN: ng is merged only at
    the start or end of the word; rh only at the start or after d/l/m/n/t.
  * everything else: ng is always merged; rh as above.

Concatenating the returned units always gives back the input word.
"""
from __future__ import annotations

import re
from typing import Callable, List, Optional

DONT_SPLIT_RH = frozenset({
    "Caerhos", "Cilrhedyn", "Cwmyrhiwdre", "Nantyrhynnau", "Porthyrhyd",
    "Trerhedyn", "Trerhingyll", "Troedyrhiw", "arhythmia", "arhythmig",
    "coleorhisa", "ewrhythmeg", "gonorrhoea", "isorhythmig", "mycorhisa",
    "pyorhea", "yrhawg",
})

SPLIT_NG = frozenset({
    "Abergwyngregyn", "Angliad", "Anglican", "Anglicanaidd", "Angola", "Bangladesh",
    "Bangor", "Bengal", "Blaengarw", "Blaengwrach", "Blaengwynfi", "Brongest",
    "Bronglais", "Bryngarn", "Bryngwran", "Bryngwyn", "Carngowil", "Carnguwch",
    "Carngwcw", "Cefngorwydd", "Cilmaengwyn", "Congo", "Cryngae", "Felinganol",
    "Ffynnongroyw", "Garthbrengi", "Glangors", "Grongaer", "Hengastell", "Hengoed",
    "Hengwm", "Hengwrt", "Hwngaraidd", "Hwngareg", "Hwngari", "Lingoed",
    "Llanengan", "Llanfairpwllgwyngyll", "Llwyngroes", "Llwyngwair", "Llwyngwern",
    "Maengwyn", "Melingriffith", "Mongolia", "Myngul", "Pengelli", "Penglais",
    "Pengorffwysfa", "Pengrynwr", "Pengwern", "Penybenglog", "Singrug",
    "Tafarngelyn", "Tanganyika", "Tongwynlais", "Tringarth", "Ynysymaengwyn",
    "amcangyfrifyn", "arlwyngig", "arweingi", "bangaw", "bangorwaith", "bechingalw",
    "bingo", "brongoch", "browngoch", "bryngaer", "cangarŵ", "conga", "congren",
    "cringoch", "cwango", "cwangoaidd", "dychangerdd", "engram", "genglo",
    "glingam", "gwerngoedwig", "gwyngoch", "gylfingroes", "hunglwyf", "hwiangerdd",
    "ingot", "jingo", "jingoistiaeth", "jwngl", "jyngl", "lingri", "llieingant",
    "llengig", "llinengrafiad", "llinganol", "llinglwm", "llongyfarch",
    "llongyfarchiad", "llwyngwril", "llyfngrwn", "manganîs", "manglo", "mango",
    "mangrof", "melyngoch", "mingam", "mingamu", "mwnglawdd", "mwngrel",
    "plaengan", "prynhawngwaith", "rhangor", "rhangymeriad", "rhieingerdd",
    "safnglo", "safngloi", "sbangl", "swyngan", "torlengig", "torllengig",
    "tudalengipio", "yngymaint", "ysgafngalon",
})

# ng is split when the lemma starts with one of the prefixes, with one of
# the roots followed by 'g', or ends in 'n' + groen/gar/garwch/gyfrif.
_NG_PREFIXES = ("angio", "bwngler", "byngalo", "dyngar", "dyngas", "gwangalon", "mening", r"tang(?!iad)")
_NG_ROOTS = (
    "llan", "blaen", "bon", "bron", "brown", "bryn", "calon", "cefn", "gwahan", "gwyn",
    "hunan", "llun", "mein", "mewn", "mwyn", "pan", "pen", "sein", "swyn", "teyrn",
    "un", "union",
)
_NG_SUFFIXES = ("groen", "gar", "garwch", "gyfrif")

_SPLIT_NG_PATTERN = re.compile(
    r"\b(?:{prefixes}|(?:{roots})g)|n(?:{suffixes})\b".format(
        prefixes="|".join(_NG_PREFIXES),
        roots="|".join(_NG_ROOTS),
        suffixes="|".join(_NG_SUFFIXES),
    ),
    re.IGNORECASE,
)

# priority order; only one can match at a given position
DIGRAPHS = ("ch", "dd", "ff", "ng", "ll", "ph", "rh", "th")
_RH_AFTER = frozenset("dlmnt")

# (word, index, lowercased digraph) -> may the digraph be merged here?
_Rule = Callable[[str, int, str], bool]


def _rh_allowed(word: str, i: int) -> bool:
    return i == 0 or word[i - 1].lower() in _RH_AFTER


def _merge_all(word: str, i: int, digraph: str) -> bool:
    return True


def _merge_default(word: str, i: int, digraph: str) -> bool:
    if digraph == "rh":
        return _rh_allowed(word, i)
    return True


def _merge_boundary_ng(word: str, i: int, digraph: str) -> bool:
    if digraph == "ng":
        return i == 0 or i + 2 == len(word)
    if digraph == "rh":
        return _rh_allowed(word, i)
    return True


def _scan(word: str, allowed: _Rule) -> List[str]:
    units: List[str] = []
    i, n = 0, len(word)
    while i < n:
        pair = word[i:i + 2]
        low = pair.lower()
        if len(pair) == 2 and low in DIGRAPHS and allowed(word, i, low):
            units.append(pair)
            i += 2
        else:
            units.append(word[i])
            i += 1
    return units


def splits_ng(lemma: str) -> bool:
    """True if ng inside words of this lemma is two letters, not a digraph."""
    return lemma in SPLIT_NG or _SPLIT_NG_PATTERN.search(lemma) is not None


def split_word(word: str, lemma: Optional[str] = None) -> List[str]:
    """
    Split a Welsh word into digraphs and single characters.

    Matching is case-insensitive; the returned units keep the input's case.
    ``lemma`` selects the exception rules and defaults to ``word``.
    """
    lemma = word if lemma is None else lemma

    if lemma in DONT_SPLIT_RH:
        return _scan(word, _merge_all)
    if splits_ng(lemma):
        return _scan(word, _merge_boundary_ng)
    return _scan(word, _merge_default)
