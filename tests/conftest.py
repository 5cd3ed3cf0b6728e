"""
Shared fixtures: a fake DBHub.io service built with FastAPI.

The fake speaks the same wire protocol as the real service (POST,
multipart form fields, 'apikey' field, JSON bodies, {"error": ...} on
failure) and records every form it receives.
"""

import base64

import pytest
from fastapi import FastAPI, Form
from fastapi.responses import JSONResponse


TEST_API_KEY = "test-api-key"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_fake_service(api_key: str = TEST_API_KEY) -> FastAPI:
    """Build a fake DBHub service holding a couple of databases in memory."""
    app = FastAPI(title="Fake DBHub")
    app.state.received = []

    databases = {
        ("alice", "one.sqlite"): {"tables": {"users": ["id", "name"]}, "live": False},
        ("bob", "two.sqlite"): {"tables": {"items": ["id"]}, "live": False},
        ("alice", "live.sqlite"): {"tables": {"events": ["id", "kind"]}, "live": True},
    }

    def check(apikey: str, **fields):
        app.state.received.append({"apikey": apikey, **fields})
        if apikey != api_key:
            return _error(401, "invalid API key")
        return None

    @app.post("/v1/databases")
    def list_databases(apikey: str = Form(...), live: str = Form("false")):
        failed = check(apikey, live=live)
        if failed is not None:
            return failed
        want_live = live == "true"
        return [
            name for (owner, name), db in databases.items()
            if owner == "alice" and db["live"] == want_live
        ]

    @app.post("/v1/columns")
    def list_columns(
        apikey: str = Form(...),
        dbowner: str = Form(...),
        dbname: str = Form(...),
        table: str = Form(...),
    ):
        failed = check(apikey, dbowner=dbowner, dbname=dbname, table=table)
        if failed is not None:
            return failed
        db = databases.get((dbowner, dbname))
        if db is None:
            return _error(404, "database not found")
        if table not in db["tables"]:
            return _error(404, "table not found")
        return [
            {"column_id": i, "name": col, "data_type": "TEXT", "not_null": False, "pk": 0}
            for i, col in enumerate(db["tables"][table])
        ]

    @app.post("/v1/branches")
    def list_branches(apikey: str = Form(...), dbowner: str = Form(...), dbname: str = Form(...)):
        failed = check(apikey, dbowner=dbowner, dbname=dbname)
        if failed is not None:
            return failed
        return {
            "default_branch": "main",
            "branches": {"main": {"commit": f"{dbowner}-{dbname}-head", "commit_count": 1}},
        }

    @app.post("/v1/commits")
    def list_commits(apikey: str = Form(...), dbowner: str = Form(...), dbname: str = Form(...)):
        failed = check(apikey, dbowner=dbowner, dbname=dbname)
        if failed is not None:
            return failed
        return {f"{dbowner}-{dbname}-head": {"author_name": dbowner, "message": f"Initial {dbname}"}}

    @app.post("/v1/delete")
    def delete_database(apikey: str = Form(...), dbname: str = Form(...)):
        failed = check(apikey, dbname=dbname)
        if failed is not None:
            return failed
        if databases.pop(("alice", dbname), None) is None:
            return _error(404, "database not found")
        return {"status": "OK"}

    @app.post("/v1/query")
    def run_query(
        apikey: str = Form(...),
        dbowner: str = Form(...),
        dbname: str = Form(...),
        sql: str = Form(...),
    ):
        failed = check(apikey, dbowner=dbowner, dbname=dbname, sql=sql)
        if failed is not None:
            return failed
        try:
            text = base64.b64decode(sql, validate=True).decode("utf-8")
        except ValueError:
            return _error(400, "sql is not base64 encoded")
        if "nothing" in text:
            return None
        return [[{"Name": "sql", "Type": 3, "Value": text}]]

    @app.post("/v1/execute")
    def run_execute(
        apikey: str = Form(...),
        dbowner: str = Form(...),
        dbname: str = Form(...),
        sql: str = Form(...),
    ):
        failed = check(apikey, dbowner=dbowner, dbname=dbname, sql=sql)
        if failed is not None:
            return failed
        db = databases.get((dbowner, dbname))
        if db is None or not db["live"]:
            return _error(400, "execute is only supported on live databases")
        return {"rows_changed": 1, "status": "OK"}

    return app


@pytest.fixture
def fake_service():
    """A fresh fake DBHub service."""
    return create_fake_service()


@pytest.fixture
def api_key():
    return TEST_API_KEY
