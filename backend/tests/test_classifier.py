from __future__ import annotations
import pytest

from jobsync.services.classifier import (
    JobCategory,
    JobType,
    classify_category,
    classify_type,
    detect_india_eligible,
    detect_remote,
)


def test_intern_keyword_beats_category_terms_and_ai_beats_software():
    title = "Software Engineering Intern"
    description = "You will work on machine learning pipelines."

    assert classify_type(title, description) == JobType.INTERNSHIP
    assert classify_category(title, description) == JobCategory.AI_ML


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Graduate Trainee", JobType.INTERNSHIP),
        ("Apprentice Electrician", JobType.INTERNSHIP),
        ("Part-time Data Analyst", JobType.PART_TIME),
        ("Part Time Barista", JobType.PART_TIME),
        ("Freelance React Developer", JobType.CONTRACT),
        ("Temporary Warehouse Assistant", JobType.CONTRACT),
        ("SAP Consultant", JobType.CONTRACT),
        ("Senior Backend Engineer", JobType.FULL_TIME),
        ("International Sales Manager", JobType.FULL_TIME),
    ],
)
def test_job_type_rules(title, expected):
    assert classify_type(title) == expected


def test_job_type_first_match_wins():
    # Internship is checked before part-time and contract.
    assert classify_type("Part-time Marketing Intern", "6 month contract") == JobType.INTERNSHIP
    assert classify_type("Part-time contract tester") == JobType.PART_TIME


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Senior AI Engineer", JobCategory.AI_ML),
        ("ML Ops Specialist", JobCategory.AI_ML),
        ("Computer Vision Researcher", JobCategory.AI_ML),
        ("Data Scientist", JobCategory.DATA),
        ("Power BI Developer", JobCategory.DATA),
        ("PostgreSQL DBA", JobCategory.DATA),
        ("Frontend Developer (React)", JobCategory.SOFTWARE),
        ("QA Automation Tester", JobCategory.SOFTWARE),
        ("iOS Engineer", JobCategory.SOFTWARE),
        ("Account Executive", JobCategory.NON_TECH),
        ("Maintenance Technician", JobCategory.NON_TECH),
    ],
)
def test_category_rules(title, expected):
    assert classify_category(title) == expected


def test_data_beats_software():
    assert classify_category("Data Engineer", "Python, AWS, Kubernetes") == JobCategory.DATA


def test_remote_from_text_and_flag():
    assert detect_remote("Remote - Worldwide", "") is True
    assert detect_remote("Berlin", "We are a distributed team") is True
    assert detect_remote("Pune", "WFH two days a week") is True
    assert detect_remote("Berlin", "", flag=True) is True
    assert detect_remote("Berlin, Germany", "Office based") is False


def test_explicit_false_flag_does_not_override_text():
    assert detect_remote("Remote (US)", "", flag=False) is True


def test_india_eligibility():
    assert detect_india_eligible("Bengaluru, Karnataka") is True
    assert detect_india_eligible("Gurugram") is True
    assert detect_india_eligible("Singapore", "APAC team") is True
    assert detect_india_eligible("Berlin, Germany", "On-site") is False


def test_remote_always_india_eligible():
    assert detect_india_eligible("New York, NY", "US citizens only", is_remote=True) is True
