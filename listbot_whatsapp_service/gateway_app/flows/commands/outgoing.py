from typing import Callable, Optional

SEND_IMPL: Optional[Callable[[str, str], None]] = None


def send_whatsapp(to: str, body: str) -> None:
    """
    Production: the webhook sets SEND_IMPL to the Graph API sender.
    Simulator / tests: SEND_IMPL is a print or capture function.
    """
    if SEND_IMPL is not None:
        SEND_IMPL(to, body)
        return

    print(f"[FAKE SEND] → {to}: {body}")
