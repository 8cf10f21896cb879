"""Locale-aware phone recognition.

Hungary, Slovakia and Czechia have dedicated pattern families and run first.
Their signatures are then excluded from the generic EU fallback, so a number
is reported once, under the most specific locale that recognized it.
"""

import re

from app.schemas.extraction import PhoneBreakdown, PhoneMatch

_SEP = r"[\s.-]?"

EU_COUNTRY_CODES = {
    "43": "AT", "32": "BE", "359": "BG", "385": "HR", "357": "CY",
    "45": "DK", "372": "EE", "358": "FI", "33": "FR", "49": "DE",
    "30": "GR", "353": "IE", "39": "IT", "371": "LV", "370": "LT",
    "352": "LU", "356": "MT", "31": "NL", "48": "PL", "351": "PT",
    "40": "RO", "386": "SI", "34": "ES", "46": "SE",
}

# Handled by the dedicated recognizers, never by the fallback
PRIORITY_COUNTRY_CODES = frozenset({"36", "421", "420"})


def digit_signature(number: str) -> str:
    """Digits only: the dedup key for a phone number."""
    return re.sub(r"\D", "", number)


def _pattern(body: str) -> re.Pattern[str]:
    return re.compile(body.replace("{SEP}", _SEP))


class PhoneRecognizer:
    """Ordered (regex, template) pairs for one locale.

    Each template is formatted with the match groups to build the canonical
    number. Matches whose signature length falls outside
    [min_digits, max_digits], or whose signature was already seen, are dropped.
    """

    def __init__(
        self,
        country: str,
        patterns: list[tuple[re.Pattern[str], str]],
        min_digits: int,
        max_digits: int,
    ):
        self.country = country
        self._patterns = patterns
        self._min_digits = min_digits
        self._max_digits = max_digits

    def _canonical(self, match: re.Match[str], template: str) -> PhoneMatch | None:
        """Build the canonical match; subclasses return None to reject it."""
        return PhoneMatch(number=template.format(*match.groups()), country=self.country)

    def recognize(self, text: str, excluded: set[str] | frozenset[str] = frozenset()) -> list[PhoneMatch]:
        seen = set(excluded)
        results: list[PhoneMatch] = []
        for regex, template in self._patterns:
            for match in regex.finditer(text):
                phone = self._canonical(match, template)
                if phone is None:
                    continue
                signature = digit_signature(phone.number)
                if not self._min_digits <= len(signature) <= self._max_digits:
                    continue
                if signature in seen:
                    continue
                seen.add(signature)
                results.append(phone)
        return results


class EuFallbackRecognizer(PhoneRecognizer):
    """Any international number whose country code is an EU member code."""

    def __init__(self, country_codes: dict[str, str] = EU_COUNTRY_CODES):
        super().__init__(
            country="EU",
            patterns=[
                (_pattern(r"\+(\d{2,3}){SEP}(\d[\d\s.-]{5,14}\d)"), ""),
                (_pattern(r"00(\d{2,3}){SEP}(\d[\d\s.-]{5,14}\d)"), ""),
            ],
            min_digits=9,
            max_digits=15,
        )
        self._country_codes = {
            code: country
            for code, country in country_codes.items()
            if code not in PRIORITY_COUNTRY_CODES
        }

    def _canonical(self, match: re.Match[str], template: str) -> PhoneMatch | None:
        code, rest = match.group(1), match.group(2)
        country = self._country_codes.get(code)
        if country is None:
            return None
        grouped = re.sub(r"[\s.-]+", " ", rest).strip()
        return PhoneMatch(number=f"+{code} {grouped}", country=country)


HUNGARY = PhoneRecognizer(
    country="HU",
    patterns=[
        (_pattern(r"\+36{SEP}(\d{1,2}){SEP}(\d{3}){SEP}(\d{3,4})"), "+36 {} {} {}"),
        (_pattern(r"00{SEP}36{SEP}(\d{1,2}){SEP}(\d{3}){SEP}(\d{3,4})"), "+36 {} {} {}"),
        (_pattern(r"(?<!\d)06{SEP}(1|20|30|31|50|70){SEP}(\d{3}){SEP}(\d{3,4})(?!\d)"), "+36 {} {} {}"),
        (_pattern(r"\(06{SEP}1\){SEP}(\d{3}){SEP}(\d{4})"), "+36 1 {} {}"),
        (_pattern(r"(?<!\d)36{SEP}(1|20|30|31|50|70){SEP}(\d{3}){SEP}(\d{3,4})(?!\d)"), "+36 {} {} {}"),
    ],
    min_digits=10,
    max_digits=12,
)

SLOVAKIA = PhoneRecognizer(
    country="SK",
    patterns=[
        (_pattern(r"\+421{SEP}(\d{1,3}){SEP}(\d{3}){SEP}(\d{3})"), "+421 {} {} {}"),
        (_pattern(r"00{SEP}421{SEP}(\d{1,3}){SEP}(\d{3}){SEP}(\d{3})"), "+421 {} {} {}"),
        # mobile
        (_pattern(r"(?<!\d)0(9[01456789]\d){SEP}(\d{3}){SEP}(\d{3})(?!\d)"), "+421 {} {} {}"),
        # Bratislava
        (_pattern(r"(?<!\d)0(2){SEP}(\d{4}){SEP}(\d{4})(?!\d)"), "+421 {} {} {}"),
        # regional
        (_pattern(r"(?<!\d)0([3-5]\d){SEP}(\d{3}){SEP}(\d{4})(?!\d)"), "+421 {} {} {}"),
    ],
    min_digits=11,
    max_digits=13,
)

CZECHIA = PhoneRecognizer(
    country="CZ",
    patterns=[
        (_pattern(r"\+420{SEP}(\d{3}){SEP}(\d{3}){SEP}(\d{3})"), "+420 {} {} {}"),
        (_pattern(r"00{SEP}420{SEP}(\d{3}){SEP}(\d{3}){SEP}(\d{3})"), "+420 {} {} {}"),
        (_pattern(r"(?<!\d)420{SEP}(\d{3}){SEP}(\d{3}){SEP}(\d{3})(?!\d)"), "+420 {} {} {}"),
    ],
    min_digits=11,
    max_digits=13,
)

EU_FALLBACK = EuFallbackRecognizer()

PRIORITY_RECOGNIZERS = (HUNGARY, SLOVAKIA, CZECHIA)


def extract_phones(text: str) -> PhoneBreakdown:
    """Run the priority recognizers, then the EU fallback, over preprocessed text."""
    excluded: set[str] = set()
    by_country: dict[str, list[PhoneMatch]] = {}

    for recognizer in PRIORITY_RECOGNIZERS:
        matches = recognizer.recognize(text, excluded)
        excluded.update(digit_signature(m.number) for m in matches)
        by_country[recognizer.country.lower()] = matches

    eu = EU_FALLBACK.recognize(text, excluded)
    priority = by_country["hu"] + by_country["sk"] + by_country["cz"]

    return PhoneBreakdown(
        all=priority + eu,
        hu=by_country["hu"],
        sk=by_country["sk"],
        cz=by_country["cz"],
        eu=eu,
    )
