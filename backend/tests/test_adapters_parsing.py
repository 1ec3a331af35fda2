from __future__ import annotations

import httpx

from jobsync.crawlers.adapters import adzuna, arbeitnow, indianapi, jobicy, remotive, themuse
from jobsync.crawlers.base import RawPosting, SourceAdapter
from jobsync.crawlers.errors import UpstreamRateLimited


class FakeGet:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def _adzuna_payload(n: int) -> dict:
    return {
        "results": [
            {
                "id": n,
                "title": f"Python Developer {n}",
                "company": {"display_name": "Acme"},
                "location": {"display_name": ""},
                "description": "Build APIs",
                "salary_min": 50000,
                "salary_max": 70000,
                "redirect_url": f"https://adzuna.test/jobs/{n}",
                "created": "2026-02-20T07:20:13Z",
            }
        ]
    }


def test_adzuna_queries_capped_and_mapped(monkeypatch):
    fake = FakeGet(_adzuna_payload(1))
    monkeypatch.setattr(adzuna, "get_json", fake)

    jobs = adzuna.AdzunaAdapter(app_id="id", app_key="key", query_delay=0).fetch()

    # 3 countries x 2 queries.
    assert len(fake.calls) == 6
    assert fake.calls[0][0].endswith("/in/search/1")
    assert fake.calls[0][1]["params"]["what"] == "software"
    assert fake.calls[1][1]["params"]["what"] == "developer"
    assert len(jobs) == 6
    assert jobs[0].company == "Acme"
    assert jobs[0].location == "IN"
    assert jobs[0].salary == "50000 - 70000"
    assert jobs[0].url == "https://adzuna.test/jobs/1"


def test_adzuna_without_credentials_makes_no_request(monkeypatch):
    fake = FakeGet(_adzuna_payload(1))
    monkeypatch.setattr(adzuna, "get_json", fake)

    adapter = adzuna.AdzunaAdapter(app_id="", app_key="")

    assert adapter.is_configured() is False
    assert adapter.fetch() == []
    assert fake.calls == []


def test_adzuna_stops_querying_after_rate_limit(monkeypatch):
    fake = FakeGet(_adzuna_payload(1), UpstreamRateLimited("429"), _adzuna_payload(3))
    monkeypatch.setattr(adzuna, "get_json", fake)

    jobs = adzuna.AdzunaAdapter(app_id="id", app_key="key", query_delay=0).fetch()

    assert len(fake.calls) == 2
    assert [j.url for j in jobs] == ["https://adzuna.test/jobs/1"]


def test_adzuna_failed_query_does_not_stop_the_rest(monkeypatch):
    fake = FakeGet(httpx.ConnectError("down"), _adzuna_payload(2))
    monkeypatch.setattr(adzuna, "get_json", fake)

    jobs = adzuna.AdzunaAdapter(app_id="id", app_key="key", query_delay=0).fetch()

    assert len(fake.calls) == 6
    assert len(jobs) == 5


def test_arbeitnow_keeps_tech_jobs_and_remote_flag(monkeypatch):
    payload = {
        "data": [
            {
                "slug": "backend-dev",
                "title": "Backend Developer",
                "company_name": "Beta GmbH",
                "location": "Berlin",
                "description": "<p>Work with <b>Go</b> &amp; Postgres</p>",
                "remote": True,
                "url": "https://arbeitnow.test/backend-dev",
                "tags": ["Software"],
                "created_at": 1700000000,
            },
            {
                "slug": "baecker",
                "title": "Bäckereifachverkäufer",
                "company_name": "Brot GmbH",
                "location": "Köln",
                "description": "Brot verkaufen",
                "remote": False,
                "url": "https://arbeitnow.test/baecker",
                "tags": [],
                "created_at": 1700000000,
            },
        ]
    }
    monkeypatch.setattr(arbeitnow, "get_json", FakeGet(payload))

    jobs = arbeitnow.ArbeitnowAdapter().fetch()

    assert len(jobs) == 1
    assert jobs[0].title == "Backend Developer"
    assert jobs[0].remote is True
    assert jobs[0].description == "Work with Go & Postgres"


def test_arbeitnow_non_string_description_does_not_raise(monkeypatch):
    fake = FakeGet({"data": [{"title": "Python Developer", "url": "https://a.test/1", "description": 12345}]})
    monkeypatch.setattr(arbeitnow, "get_json", fake)

    jobs = arbeitnow.ArbeitnowAdapter().fetch()

    assert len(jobs) == 1
    assert jobs[0].description == "12345"


class ItemShapeAdapter(SourceAdapter):
    source_name = "Shape"

    def __init__(self, search):
        self.search = search

    def collect(self):
        return self.run_queries(["first", "second", "third"], self.search, delay=0)


def test_unexpected_item_shape_in_collect_returns_empty():
    class Broken(SourceAdapter):
        source_name = "Broken"

        def collect(self):
            return [RawPosting(url=item["url"]) for item in [{"title": "no url"}]]

    assert Broken().fetch() == []


def test_unexpected_item_shape_in_one_query_keeps_the_rest():
    def search(query):
        if query == "second":
            raise TypeError("'int' object is not subscriptable")
        return [RawPosting(url=f"https://shape.test/{query}")]

    jobs = ItemShapeAdapter(search).fetch()

    assert [j.url for j in jobs] == ["https://shape.test/first", "https://shape.test/third"]


def test_remotive_limits_and_marks_remote(monkeypatch):
    payload = {
        "jobs": [
            {
                "id": i,
                "url": f"https://remotive.test/{i}",
                "title": "Frontend Engineer",
                "company_name": "Gamma",
                "candidate_required_location": "" if i == 0 else "Europe",
                "description": "<div>React</div>",
                "salary": "",
                "publication_date": "2026-02-01T10:00:00",
            }
            for i in range(40)
        ]
    }
    fake = FakeGet(payload)
    monkeypatch.setattr(remotive, "get_json", fake)

    jobs = remotive.RemotiveAdapter().fetch()

    assert len(jobs) == 30
    assert fake.calls[0][1]["params"] == {"category": "software-dev", "limit": 30}
    assert fake.calls[0][1]["timeout"] == 15.0
    assert jobs[0].location == "Remote"
    assert jobs[1].location == "Europe"
    assert all(j.remote for j in jobs)
    assert jobs[0].salary is None
    assert jobs[0].description == "React"


def test_remotive_timeout_returns_empty(monkeypatch):
    monkeypatch.setattr(remotive, "get_json", FakeGet(httpx.ReadTimeout("slow")))
    assert remotive.RemotiveAdapter().fetch() == []


def test_remotive_malformed_body_returns_empty(monkeypatch):
    monkeypatch.setattr(remotive, "get_json", FakeGet({"unexpected": True}))
    assert remotive.RemotiveAdapter().fetch() == []


def test_non_2xx_returns_empty(monkeypatch):
    request = httpx.Request("GET", "https://www.themuse.com/api/public/jobs")
    error = httpx.HTTPStatusError("server error", request=request, response=httpx.Response(503, request=request))
    monkeypatch.setattr(themuse, "get_json", FakeGet(error))

    assert themuse.TheMuseAdapter().fetch() == []


def test_themuse_builds_url_and_remote_from_locations(monkeypatch):
    payload = {
        "results": [
            {
                "id": 11,
                "short_name": "staff-engineer",
                "name": "Staff Engineer",
                "company": {"name": "Delta", "short_name": "delta"},
                "locations": [{"name": "New York, NY"}, {"name": "Flexible / Remote"}],
                "contents": "<p>Lead&nbsp;platform work</p>",
                "refs": {},
                "publication_date": "2026-02-02T00:00:00Z",
            },
            {
                "id": 12,
                "name": "Data Analyst",
                "company": {"name": "Epsilon"},
                "locations": [{"name": "Chicago, IL"}],
                "contents": "",
                "refs": {"landing_page": "https://www.themuse.com/jobs/epsilon/data-analyst"},
            },
        ]
    }
    monkeypatch.setattr(themuse, "get_json", FakeGet(payload))

    jobs = themuse.TheMuseAdapter().fetch()

    assert jobs[0].url == "https://www.themuse.com/jobs/delta/staff-engineer"
    assert jobs[0].location == "New York, NY, Flexible / Remote"
    assert jobs[0].remote is True
    assert jobs[0].description == "Lead platform work"
    assert jobs[1].url == "https://www.themuse.com/jobs/epsilon/data-analyst"
    assert jobs[1].remote is False


def test_jobicy_dedupes_urls_across_industries(monkeypatch):
    def payload(*urls):
        return {
            "jobs": [
                {
                    "id": u,
                    "url": u,
                    "jobTitle": "DevOps Engineer",
                    "companyName": "Zeta",
                    "jobGeo": "Anywhere",
                    "jobExcerpt": "Terraform",
                    "annualSalaryMin": 90000,
                    "annualSalaryMax": 120000,
                    "pubDate": "2026-02-03 09:00:00",
                }
                for u in urls
            ]
        }

    fake = FakeGet(
        payload("https://jobicy.test/1", "https://jobicy.test/2"),
        payload("https://jobicy.test/2"),
        payload("https://jobicy.test/3"),
        payload(),
    )
    monkeypatch.setattr(jobicy, "get_json", fake)

    jobs = jobicy.JobicyAdapter(query_delay=0).fetch()

    assert [c[1]["params"]["industry"] for c in fake.calls] == ["dev", "devops", "data", "design"]
    assert sorted(j.url for j in jobs) == ["https://jobicy.test/1", "https://jobicy.test/2", "https://jobicy.test/3"]
    assert jobs[0].salary == "$90000 - $120000"
    assert jobs[0].remote is True


def test_indianapi_requires_key(monkeypatch):
    fake = FakeGet([])
    monkeypatch.setattr(indianapi, "get_json", fake)

    assert indianapi.IndianApiAdapter(api_key="").fetch() == []
    assert fake.calls == []


def test_indianapi_accepts_list_payload_and_sends_key(monkeypatch):
    fake = FakeGet(
        [
            {
                "job_title": "Java Developer",
                "company_name": "Infy",
                "job_location": "",
                "job_description": "Spring Boot",
                "salary_range": "6-10 LPA",
                "apply_url": "https://indianapi.test/jobs/9",
                "date_posted": "2026-02-10",
            }
        ]
    )
    monkeypatch.setattr(indianapi, "get_json", fake)

    jobs = indianapi.IndianApiAdapter(api_key="secret").fetch()

    assert fake.calls[0][1]["headers"] == {"X-Api-Key": "secret"}
    assert fake.calls[0][1]["params"] == {"limit": 100}
    assert len(jobs) == 1
    assert jobs[0].url == "https://indianapi.test/jobs/9"
    assert jobs[0].location == "India"
    assert jobs[0].salary == "6-10 LPA"
