"""Schemas for the plan endpoint."""

from pydantic import BaseModel, Field


class Plan(BaseModel):
    """Ordered plan produced by the plan chain. Also the schema the model output is parsed against."""

    steps: list[str] = Field(..., description="different steps to follow, should be in sorted order")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "steps": [
                        "search_internet(query='most recent champions league winner') to find the winning team",
                        "send_tweet(text=...) announcing the winner found in step 1",
                    ]
                }
            ]
        }
    }
