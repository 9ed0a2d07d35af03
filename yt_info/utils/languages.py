# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Caption language code validation."""

from __future__ import annotations

# ISO 639-1 codes, plus the legacy/regional variants YouTube uses for tracks.
LANGUAGE_CODES: frozenset[str] = frozenset(
    """
    aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce
    ch co cr cs cu cv cy da de dv dz ee el en eo es et eu fa ff fi fj fo fr
    fy ga gd gl gn gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik io is
    it iu ja jv ka kg ki kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln
    lo lt lu lv mg mh mi mk ml mn mr ms mt my na nb nd ne ng nl nn no nr nv
    ny oc oj om or os pa pi pl ps pt qu rm rn ro ru rw sa sc sd se sg si sk
    sl sm sn so sq sr ss st su sv sw ta te tg th ti tk tl tn to tr ts tt tw
    ty ug uk ur uz ve vi vo wa wo xh yi yo za zh zu
    fil haw iw jw
    en-GB en-US en-CA en-AU en-IN es-ES es-MX es-419 fr-FR fr-CA pt-BR pt-PT
    de-DE de-AT de-CH it-IT nl-NL nl-BE sr-Latn zh-CN zh-TW zh-HK zh-Hans
    zh-Hant
    """.split()
)

_LOWERED = frozenset(code.lower() for code in LANGUAGE_CODES)


def is_valid_language_code(code: str | None) -> bool:
    """Check whether ``code`` is a caption language code YouTube recognises.

    Matching is case-insensitive; ``None`` and empty strings are invalid.
    """
    if not code:
        return False
    return code.strip().lower() in _LOWERED
