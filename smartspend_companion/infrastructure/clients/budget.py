"""Budget store HTTP client for fetching a category's monthly budget"""

import httpx
from typing import Optional
from smartspend_companion.domain.models import BudgetCategory, BudgetContext
from smartspend_companion.domain.exceptions import BudgetStoreError
from smartspend_companion.domain.decision import to_decimal
from smartspend_companion.config import settings


class BudgetClient:
    """Client for the external budget store"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.budget_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    async def get_budget(self, user_id: str, category: BudgetCategory, month: str) -> Optional[BudgetContext]:
        """
        Fetch the monthly limit and amount spent for one category.

        Returns None when no budget is set for the category (404).

        Raises:
            BudgetStoreError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/budgets",
                    params={"user_id": user_id, "category": category.value, "month": month},
                )
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                data = response.json()

                if data is None:
                    return None

                return BudgetContext(
                    category=category,
                    monthly_limit=to_decimal(data["monthly_limit"]),
                    spent=to_decimal(data.get("spent")),
                )

            except httpx.TimeoutException as e:
                raise BudgetStoreError(f"Budget store timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BudgetStoreError(f"Budget store error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise BudgetStoreError(f"Budget store unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise BudgetStoreError(f"Invalid budget data from store: {e}") from e
