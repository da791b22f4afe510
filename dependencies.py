# dependencies.py
from services.analyze_service import ADVICE_API_URL, AdviceClient

_CLIENT = AdviceClient(ADVICE_API_URL)


def get_advice_client() -> AdviceClient:
    # tests swap this through app.dependency_overrides
    return _CLIENT
