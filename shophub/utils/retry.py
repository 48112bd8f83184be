# shophub/utils/retry.py
from sqlalchemy.exc import OperationalError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from shophub.utils.settings import CHECKOUT_RETRY_ATTEMPTS


def db_retry(attempts: int = CHECKOUT_RETRY_ATTEMPTS):
    """
    Ponawia cala transakcje przy deadlocku / bledzie serializacji.
    Tylko dla operacji ktore po rollbacku mozna bezpiecznie powtorzyc.
    """
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        retry=retry_if_exception_type(OperationalError),
    )
