# shophub/services/notification_service.py
from shophub.celery_worker import celery_app
from shophub.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach przez Celery.
    Wysylane dopiero po commicie, blad brokera nie cofa zamowienia.
    """

    def order_placed(self, user_id: int, order_id: int, order_number: str) -> None:
        self._publish(send_order_notification_task, user_id, order_id, order_number, "placed")

    def order_cancelled(self, user_id: int, order_id: int, order_number: str) -> None:
        self._publish(send_order_notification_task, user_id, order_id, order_number, "cancelled")

    @staticmethod
    def _publish(task, *args) -> None:
        try:
            task.delay(*args)
        except Exception as e:
            logger.warning(f"Nie udalo sie wyslac powiadomienia {args}: {e}")


@celery_app.task(name="shophub.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, order_number: str, event: str):
    """
    Celery task - w docelowym systemie email/SMS/push.
    Na razie tylko loguje.
    """
    logger.info(
        f"[NOTIFICATION] User {user_id}: order {order_number} {event}",
        extra={"user_id": user_id, "order_id": order_id},
    )
    return {"user_id": user_id, "order_id": order_id, "event": event, "status": "sent"}
