# ABOUTME: Session-wide pytest setup for the weather_chat suite.
# ABOUTME: Blocks real model requests so chat tests only reach FunctionModel/TestModel.

import pydantic_ai.models

pydantic_ai.models.ALLOW_MODEL_REQUESTS = False
