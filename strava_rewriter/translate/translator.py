from __future__ import annotations

from collections.abc import Mapping

from strava_rewriter.translate.dictionary import RU_EN_WORDS


class Translator:
    """Translates "<time of day> <sport>" activity titles word by word.

    Anything that is not exactly two known words comes back untouched, which
    also makes the translation idempotent on already translated titles.
    """

    def __init__(self, words: Mapping[str, str] | None = None) -> None:
        self._words = dict(RU_EN_WORDS if words is None else words)

    def activity_name(self, name: str) -> str:
        name_lower = name.strip().lower()

        time_of_day, sep, sport_type = name_lower.partition(" ")
        if not sep or not time_of_day or not sport_type:
            return name

        tr_time_of_day = self._words.get(time_of_day)
        if tr_time_of_day is None:
            return name

        tr_sport_type = self._words.get(sport_type)
        if tr_sport_type is None:
            return name

        return f"{tr_time_of_day.title()} {tr_sport_type.title()}"


_default_translator = Translator()


def translate_activity_name(name: str) -> str:
    return _default_translator.activity_name(name)
