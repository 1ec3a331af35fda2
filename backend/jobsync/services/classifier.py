"""Keyword classification of job postings.

Each classification is an ordered list of ``(pattern, label)`` rules. Rules are
tried top to bottom against lowercased text and the first match wins, so the
order of the lists is the priority order.
"""
from __future__ import annotations
from enum import Enum
import re
from typing import TypeVar

L = TypeVar("L")


class JobType(str, Enum):
    INTERNSHIP = "INTERNSHIP"
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"


class JobCategory(str, Enum):
    AI_ML = "AI_ML"
    DATA = "DATA"
    SOFTWARE = "SOFTWARE"
    NON_TECH = "NON_TECH"


def _terms(*terms: str) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(terms) + r")\b")


TYPE_RULES: list[tuple[re.Pattern[str], JobType]] = [
    (_terms(r"interns?", r"internships?", r"trainees?", r"apprentices?", r"apprenticeships?"), JobType.INTERNSHIP),
    (_terms(r"part[- ]?time", r"half[- ]time"), JobType.PART_TIME),
    (
        _terms(r"contract(?:or|ors|ual)?", r"freelancer?s?", r"freelance", r"temporary", r"consultants?"),
        JobType.CONTRACT,
    ),
]

CATEGORY_RULES: list[tuple[re.Pattern[str], JobCategory]] = [
    (
        _terms(
            r"machine learning",
            r"deep learning",
            r"artificial intelligence",
            r"neural networks?",
            r"nlp",
            r"computer vision",
            r"tensorflow",
            r"pytorch",
            r"ai",
            r"ml",
        ),
        JobCategory.AI_ML,
    ),
    (
        _terms(
            r"data scien\w*",
            r"data engineer\w*",
            r"data analy\w*",
            r"big data",
            r"analytics?",
            r"business intelligence",
            r"etl",
            r"data warehous\w*",
            r"\w*sql",
            r"tableau",
            r"power bi",
            r"bi (?:developer|analyst|engineer)s?",
        ),
        JobCategory.DATA,
    ),
    (
        _terms(
            r"software",
            r"developers?",
            r"development",
            r"engineers?",
            r"engineering",
            r"programmers?",
            r"programming",
            r"front[- ]?end",
            r"back[- ]?end",
            r"full[- ]?stack",
            r"devops",
            r"cloud",
            r"java",
            r"python",
            r"javascript",
            r"typescript",
            r"golang",
            r"react",
            r"node(?:\.?js)?",
            r"aws",
            r"azure",
            r"gcp",
            r"kubernetes",
            r"docker",
            r"apis?",
            r"web",
            r"mobile",
            r"ios",
            r"android",
            r"qa",
            r"test(?:s|ing|er|ers)?",
            r"sdet",
            r"automation",
        ),
        JobCategory.SOFTWARE,
    ),
]

REMOTE_PATTERN = _terms(r"remote", r"work from home", r"wfh", r"anywhere", r"distributed")

INDIA_PATTERN = _terms(
    r"india",
    r"bangalore",
    r"bengaluru",
    r"mumbai",
    r"delhi",
    r"new delhi",
    r"hyderabad",
    r"chennai",
    r"pune",
    r"kolkata",
    r"noida",
    r"gurgaon",
    r"gurugram",
    r"asia",
    r"apac",
    r"worldwide",
    r"global",
    r"anywhere",
)


def first_match(rules: list[tuple[re.Pattern[str], L]], text: str, default: L) -> L:
    lowered = text.lower()
    for pattern, label in rules:
        if pattern.search(lowered):
            return label
    return default


def classify_type(title: str, description: str = "") -> JobType:
    return first_match(TYPE_RULES, f"{title} {description}", JobType.FULL_TIME)


def classify_category(title: str, description: str = "") -> JobCategory:
    return first_match(CATEGORY_RULES, f"{title} {description}", JobCategory.NON_TECH)


def detect_remote(location: str, description: str = "", flag: bool | None = None) -> bool:
    # An explicit False does not veto the text match.
    if flag is True:
        return True
    return bool(REMOTE_PATTERN.search(f"{location} {description}".lower()))


def detect_india_eligible(location: str, description: str = "", is_remote: bool = False) -> bool:
    if is_remote:
        return True
    return bool(INDIA_PATTERN.search(f"{location} {description}".lower()))
