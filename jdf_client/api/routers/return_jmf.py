"""Return-JMF callback router for queue entry notifications sent back by the server."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as element_tree

from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from jdf_client.adapters import JmfReturnCode, jmf_return_code_default_message
from jdf_client.config import RETURN_JMF_ROUTE_PATH, AppSettings
from jdf_client.jobs import NotificationSinkPort, ReturnJmfReceived
from jdf_client.messages import JmfMessage, message_xml_local_name

logger = logging.getLogger(__name__)

JMF_MEDIA_TYPE = "application/vnd.cip4-jmf+xml"


def api_create_return_jmf_router(settings: AppSettings, notification_sink: NotificationSinkPort) -> APIRouter:
    """Create router receiving JMF messages posted to the return URL.

    Args:
        settings: Runtime settings providing the sender identity for replies.
        notification_sink: Sink that receives one ReturnJmfReceived per accepted message.

    Returns:
        APIRouter: Router exposing the return-JMF endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if notification_sink is None:
        raise ValueError("notification_sink must not be None")

    router = APIRouter(tags=["jmf"])

    @router.post(RETURN_JMF_ROUTE_PATH)
    async def api_return_jmf_receive(request: Request) -> Response:
        """Acknowledge one JMF signal or command and publish it to the host application.

        Returns:
            Response: JMF Response document with ReturnCode `0`, or `3` for unparseable bodies.

        Raises:
            RuntimeError: Raised when a notification subscriber fails.
        """

        body = await request.body()
        reply = JmfMessage(sender_id=settings.settings_sender_id())
        try:
            incoming_root = element_tree.fromstring(body)
        except element_tree.ParseError as error:
            logger.warning("Rejected unparseable return JMF: %s", error)
            return_code = JmfReturnCode.XML_PARSER_ERROR.value
            reply.response().node_add_attribute("ReturnCode", return_code)
            notification = reply.response().node_add_child("Notification")
            notification.node_add_attribute("Class", "Error")
            notification.node_add_child("Comment").element.text = jmf_return_code_default_message(
                return_code,
                fallback_message="XML parser error.",
            )
            return Response(
                content=reply.message_get_raw(),
                media_type=JMF_MEDIA_TYPE,
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        incoming_message = next(iter(incoming_root), None)
        message_type = incoming_message.get("Type") if incoming_message is not None else None
        queue_entry_id = next(
            (
                element.get("QueueEntryID")
                for element in incoming_root.iter()
                if element.get("QueueEntryID") is not None
            ),
            None,
        )

        response = reply.response()
        if incoming_message is not None and incoming_message.get("ID") is not None:
            response.node_add_attribute("refID", incoming_message.get("ID"))
        if message_type is not None:
            response.node_add_attribute("Type", message_type)
        response.node_add_attribute("ReturnCode", JmfReturnCode.SUCCESS.value)

        logger.info(
            "Received return JMF %s (%s) for queue entry %s",
            message_xml_local_name(incoming_message.tag) if incoming_message is not None else "empty",
            message_type,
            queue_entry_id,
        )
        notification_sink.notification_publish(
            ReturnJmfReceived(
                message=body.decode("utf-8", errors="replace"),
                message_type=message_type,
                queue_entry_id=queue_entry_id,
            )
        )
        return Response(content=reply.message_get_raw(), media_type=JMF_MEDIA_TYPE, status_code=status.HTTP_200_OK)

    return router
