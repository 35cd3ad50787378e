"""Static preset groups served by the static-group module."""

SIBLINGS: tuple[str, ...] = (
    "01", "12", "23", "34", "45", "56", "67", "78", "89", "90",
)

DOUBLES: tuple[str, ...] = (
    "00", "11", "22", "33", "44", "55", "66", "77", "88", "99",
)

MIRRORS: tuple[str, ...] = (
    "000", "111", "222", "333", "444", "555", "666", "777", "888", "999",
)

STATIC_RULES: dict[str, dict] = {
    "SIBLINGS": {"title": "Siblings (01, 12...)", "data": SIBLINGS},
    "DOUBLES": {"title": "Doubles (00, 11...)", "data": DOUBLES},
    "MIRRORS": {"title": "Mirrors (XYZ)", "data": MIRRORS},
}
