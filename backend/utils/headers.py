"""Alert headers attached to write responses so clients can show notifications."""

import logging

logger = logging.getLogger(__name__)

APPLICATION_NAME = "splititApp"


def create_alert(message: str, param: str) -> dict[str, str]:
    return {
        f"X-{APPLICATION_NAME}-alert": message,
        f"X-{APPLICATION_NAME}-params": param,
    }


def create_entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{APPLICATION_NAME}.{entity_name}.created", param)


def create_entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{APPLICATION_NAME}.{entity_name}.updated", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{APPLICATION_NAME}.{entity_name}.deleted", param)


def create_failure_alert(entity_name: str, error_key: str, default_message: str) -> dict[str, str]:
    logger.error(f"Entity processing failed, {default_message}")
    return {
        f"X-{APPLICATION_NAME}-error": f"error.{error_key}",
        f"X-{APPLICATION_NAME}-params": entity_name,
    }
