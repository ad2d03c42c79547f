"""Russian to English words used in Strava's default activity titles.

Keys are lowercase Russian, values are lowercase English. Time-of-day
adjectives appear in both genders since Strava agrees them with the sport noun.
"""

TIME_OF_DAY_WORDS: dict[str, str] = {
    "утренний": "morning",
    "утренняя": "morning",
    "полуденный": "lunch",
    "полуденная": "lunch",
    "дневной": "afternoon",
    "дневная": "afternoon",
    "вечерний": "evening",
    "вечерняя": "evening",
    "ночной": "night",
    "ночная": "night",
}

SPORT_TYPE_WORDS: dict[str, str] = {
    "забег": "run",
    "заезд": "ride",
    "велозаезд": "ride",
    "заплыв": "swim",
    "ходьба": "walk",
    "тренировка": "workout",
}

RU_EN_WORDS: dict[str, str] = {**TIME_OF_DAY_WORDS, **SPORT_TYPE_WORDS}
