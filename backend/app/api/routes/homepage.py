"""
API homepage: the starting point linking to the other resources.
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["homepage"])


@router.get("/api", name="api_homepage")
async def homepage(request: Request) -> dict:
    """
    Entry point of the API.

    Example response:
        {
            "_links": {
                "self": {"href": "/api", "title": "Your API starting point"},
                "programmers": {"href": "/api/programmers"}
            }
        }
    """
    return {
        "_links": {
            "self": {
                "href": str(request.app.url_path_for("api_homepage")),
                "title": "Your API starting point",
            },
            "programmers": {"href": str(request.app.url_path_for("api_programmers_list"))},
        }
    }
