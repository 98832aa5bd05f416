"""
Versioned calendar data tables.

Published schedules that cannot be derived from a rule. Each table is a
data concern kept apart from the algorithms that use it: dates are stored
as ISO strings, validated eagerly when an EventCalendar is constructed, and
checked for expiry so that a warning fires before a table runs out.

Update these tables when the publishing bodies announce new schedules.
"""

from datetime import time

TABLE_VERSION = "2026.1"

# Federal Reserve FOMC statement dates (federalreserve.gov), 2019-2026.
# 2020-03-03 and 2020-03-15 were unscheduled emergency meetings.
FOMC_DECISION_DATES: tuple[str, ...] = (
    "2019-01-30", "2019-03-20", "2019-05-01", "2019-06-19",
    "2019-07-31", "2019-09-18", "2019-10-30", "2019-12-11",
    "2020-01-29", "2020-03-03", "2020-03-15", "2020-04-29",
    "2020-06-10", "2020-07-29", "2020-09-16", "2020-11-05", "2020-12-16",
    "2021-01-27", "2021-03-17", "2021-04-28", "2021-06-16",
    "2021-07-28", "2021-09-22", "2021-11-03", "2021-12-15",
    "2022-01-26", "2022-03-16", "2022-05-04", "2022-06-15",
    "2022-07-27", "2022-09-21", "2022-11-02", "2022-12-14",
    "2023-02-01", "2023-03-22", "2023-05-03", "2023-06-14",
    "2023-07-26", "2023-09-20", "2023-11-01", "2023-12-13",
    "2024-01-31", "2024-03-20", "2024-05-01", "2024-06-12",
    "2024-07-31", "2024-09-18", "2024-11-07", "2024-12-18",
    "2025-01-29", "2025-03-19", "2025-05-07", "2025-06-18",
    "2025-07-30", "2025-09-17", "2025-10-29", "2025-12-10",
    "2026-01-28", "2026-03-18", "2026-04-29", "2026-06-17",
    "2026-07-29", "2026-09-16", "2026-10-28", "2026-12-09",
)

# BLS CPI release dates (bls.gov).
# Months missing here use the mid-month rule in calendar.rules.
CPI_RELEASE_DATES: tuple[str, ...] = (
    "2024-01-11", "2024-02-13", "2024-03-12", "2024-04-10",
    "2024-05-15", "2024-06-12", "2024-07-11", "2024-08-14",
    "2024-09-11", "2024-10-10", "2024-11-13", "2024-12-11",
    "2025-01-15", "2025-02-12", "2025-03-12", "2025-04-10",
    "2025-05-13", "2025-06-11", "2025-07-15", "2025-08-12",
    "2025-09-11", "2025-10-24", "2025-12-18",
)

# NYSE full-day market closures (nyse.com), 2019-2026.
MARKET_HOLIDAYS: dict[str, str] = {
    "2019-01-01": "New Year's Day", "2019-01-21": "Martin Luther King Jr. Day",
    "2019-02-18": "Presidents' Day", "2019-04-19": "Good Friday",
    "2019-05-27": "Memorial Day", "2019-07-04": "Independence Day",
    "2019-09-02": "Labor Day", "2019-11-28": "Thanksgiving Day",
    "2019-12-25": "Christmas Day",
    "2020-01-01": "New Year's Day", "2020-01-20": "Martin Luther King Jr. Day",
    "2020-02-17": "Presidents' Day", "2020-04-10": "Good Friday",
    "2020-05-25": "Memorial Day", "2020-07-03": "Independence Day (observed)",
    "2020-09-07": "Labor Day", "2020-11-26": "Thanksgiving Day",
    "2020-12-25": "Christmas Day",
    "2021-01-01": "New Year's Day", "2021-01-18": "Martin Luther King Jr. Day",
    "2021-02-15": "Presidents' Day", "2021-04-02": "Good Friday",
    "2021-05-31": "Memorial Day", "2021-07-05": "Independence Day (observed)",
    "2021-09-06": "Labor Day", "2021-11-25": "Thanksgiving Day",
    "2021-12-24": "Christmas Day (observed)",
    "2022-01-17": "Martin Luther King Jr. Day", "2022-02-21": "Presidents' Day",
    "2022-04-15": "Good Friday", "2022-05-30": "Memorial Day",
    "2022-06-20": "Juneteenth (observed)", "2022-07-04": "Independence Day",
    "2022-09-05": "Labor Day", "2022-11-24": "Thanksgiving Day",
    "2022-12-26": "Christmas Day (observed)",
    "2023-01-02": "New Year's Day (observed)", "2023-01-16": "Martin Luther King Jr. Day",
    "2023-02-20": "Presidents' Day", "2023-04-07": "Good Friday",
    "2023-05-29": "Memorial Day", "2023-06-19": "Juneteenth",
    "2023-07-04": "Independence Day", "2023-09-04": "Labor Day",
    "2023-11-23": "Thanksgiving Day", "2023-12-25": "Christmas Day",
    "2024-01-01": "New Year's Day", "2024-01-15": "Martin Luther King Jr. Day",
    "2024-02-19": "Presidents' Day", "2024-03-29": "Good Friday",
    "2024-05-27": "Memorial Day", "2024-06-19": "Juneteenth",
    "2024-07-04": "Independence Day", "2024-09-02": "Labor Day",
    "2024-11-28": "Thanksgiving Day", "2024-12-25": "Christmas Day",
    "2025-01-01": "New Year's Day", "2025-01-09": "National Day of Mourning",
    "2025-01-20": "Martin Luther King Jr. Day", "2025-02-17": "Presidents' Day",
    "2025-04-18": "Good Friday", "2025-05-26": "Memorial Day",
    "2025-06-19": "Juneteenth", "2025-07-04": "Independence Day",
    "2025-09-01": "Labor Day", "2025-11-27": "Thanksgiving Day",
    "2025-12-25": "Christmas Day",
    "2026-01-01": "New Year's Day", "2026-01-19": "Martin Luther King Jr. Day",
    "2026-02-16": "Presidents' Day", "2026-04-03": "Good Friday",
    "2026-05-25": "Memorial Day", "2026-06-19": "Juneteenth",
    "2026-07-03": "Independence Day (observed)", "2026-09-07": "Labor Day",
    "2026-11-26": "Thanksgiving Day", "2026-12-25": "Christmas Day",
}

# Census Bureau advance retail sales release day of month, January first.
# Other years release on the 15th, moved to the next business day.
RETAIL_SALES_DAYS: dict[int, tuple[int, ...]] = {
    2024: (17, 15, 14, 15, 16, 18, 16, 15, 18, 17, 15, 17),
    2025: (16, 14, 14, 16, 15, 16, 16, 14, 16, 16, 14, 16),
    2026: (15, 17, 16, 15, 15, 16, 15, 14, 16, 16, 13, 16),
}
DEFAULT_RETAIL_SALES_DAY = 15

# BEA GDP release template: (month, day, estimate, quarter offset).
# Quarter offset -1 refers to Q4 of the previous year.
GDP_RELEASE_SCHEDULE: tuple[tuple[int, int, str, int], ...] = (
    (1, 27, "Advance", -1), (2, 24, "Second", -1), (3, 24, "Third", -1),
    (4, 27, "Advance", 1), (5, 25, "Second", 1), (6, 22, "Third", 1),
    (7, 27, "Advance", 2), (8, 24, "Second", 2), (9, 21, "Third", 2),
    (10, 26, "Advance", 3), (11, 23, "Second", 3), (12, 21, "Third", 3),
)

# ECB monetary policy decisions (ecb.europa.eu), 2024-2026.
ECB_DECISION_DATES: tuple[str, ...] = (
    "2024-01-25", "2024-03-07", "2024-04-11", "2024-06-06",
    "2024-07-18", "2024-09-12", "2024-10-17", "2024-12-12",
    "2025-01-30", "2025-03-06", "2025-04-17", "2025-06-05",
    "2025-07-24", "2025-09-11", "2025-10-30", "2025-12-18",
    "2026-01-22", "2026-03-05", "2026-04-23", "2026-06-04",
    "2026-07-23", "2026-09-10", "2026-10-29", "2026-12-17",
)

# Bank of England MPC decisions (bankofengland.co.uk), 2024-2026.
BOE_DECISION_DATES: tuple[str, ...] = (
    "2024-02-01", "2024-03-21", "2024-05-09", "2024-06-20",
    "2024-08-01", "2024-09-19", "2024-11-07", "2024-12-19",
    "2025-02-06", "2025-03-20", "2025-05-08", "2025-06-19",
    "2025-08-07", "2025-09-18", "2025-11-06", "2025-12-18",
    "2026-02-05", "2026-03-19", "2026-05-07", "2026-06-18",
    "2026-08-06", "2026-09-24", "2026-11-05", "2026-12-17",
)

# Bank of Japan MPM decisions (boj.or.jp), 2024-2026, Tokyo dates.
# Announced late morning JST, which is the previous evening in New York.
BOJ_DECISION_DATES: tuple[str, ...] = (
    "2024-01-23", "2024-03-19", "2024-04-26", "2024-06-14",
    "2024-07-31", "2024-09-20", "2024-10-31", "2024-12-19",
    "2025-01-24", "2025-03-19", "2025-04-25", "2025-06-13",
    "2025-07-31", "2025-09-19", "2025-10-31", "2025-12-19",
    "2026-01-23", "2026-03-18", "2026-04-30", "2026-06-19",
    "2026-07-31", "2026-09-18", "2026-10-30", "2026-12-18",
)

# Scheduled release times, Eastern exchange time.
RELEASE_TIMES: dict[str, time] = {
    "cpi": time(8, 30),
    "nfp": time(8, 30),
    "retail_sales": time(8, 30),
    "jobless_claims": time(8, 30),
    "gdp": time(8, 30),
    "ism": time(10, 0),
    "fomc": time(14, 0),
}

# Every dated table, by the name used in validation errors and expiry warnings.
DATED_TABLES: dict[str, tuple[str, ...]] = {
    "FOMC decision dates": FOMC_DECISION_DATES,
    "CPI release dates": CPI_RELEASE_DATES,
    "Market holidays": tuple(MARKET_HOLIDAYS),
    "ECB decision dates": ECB_DECISION_DATES,
    "BoE decision dates": BOE_DECISION_DATES,
    "BoJ decision dates": BOJ_DECISION_DATES,
}
