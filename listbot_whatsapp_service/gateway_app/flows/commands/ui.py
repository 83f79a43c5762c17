"""
Reply texts for the command bot.
Every function takes the active prefix so help and hints match the config.
"""

from typing import List

from listbot_whatsapp_service.gateway_app.services.stalk_lookup import Profile


def text_pong() -> str:
    return "pong 🏓"


# ---------- .addlist ----------

def text_addlist_usage(prefix: str) -> str:
    return (
        f"❌ Usage: {prefix}addlist <command> || <response> "
        f"OR {prefix}addlist <command> (then send response)"
    )


def text_addlist_format(prefix: str) -> str:
    return f"❌ Invalid format. Use: {prefix}addlist hi || hello"


def text_addlist_exists(prefix: str, name: str) -> str:
    return f"⚠️ Command {prefix}{name} already exists."


def text_addlist_waiting(prefix: str, name: str) -> str:
    return f"✍️ Now send the reply text for {prefix}{name}"


def text_addlist_added_inline(prefix: str, name: str) -> str:
    return f"✅ Command {prefix}{name} added with response."


def text_addlist_added(prefix: str, name: str) -> str:
    return f"✅ Command {prefix}{name} added."


# ---------- .commands / .dellist ----------

def text_command_list(prefix: str, names: List[str]) -> str:
    if not names:
        return "📭 No custom commands yet."
    return "📌 Custom commands:\n" + "\n".join(f"{prefix}{n}" for n in names)


def text_dellist_usage(prefix: str) -> str:
    return f"❌ Usage: {prefix}dellist <command>"


def text_dellist_not_found(prefix: str, name: str) -> str:
    return f"❌ Command {prefix}{name} not found."


def text_dellist_deleted(prefix: str, name: str) -> str:
    return f"🗑️ Deleted command {prefix}{name}"


# ---------- .stalk ----------

def text_stalk_usage(prefix: str) -> str:
    return f"❌ Usage: {prefix}stalk <userId> <zoneId>"


def text_stalk_invalid() -> str:
    return "❌ Invalid UID or Zone."


def text_stalk_failed() -> str:
    return "❌ Failed to fetch ML account info. Please try again later."


def text_stalk_profile(user_id: str, zone_id: str, profile: Profile) -> str:
    """
    Account card. Optional fields only appear when the lookup filled them.
    """
    lines = [
        "🔍 ML Account Info",
        "",
        f"🆔 User ID: {user_id}",
        f"🌍 Zone: {zone_id}",
        f"👤 Nickname: {profile.nickname}",
    ]
    if profile.level is not None:
        lines.append(f"⭐ Level: {profile.level}")
    if profile.rank:
        lines.append(f"🏆 Rank: {profile.rank}")
    if profile.hero:
        lines.append(f"🦸 Main Hero: {profile.hero}")
    if profile.win_rate is not None:
        lines.append(f"📈 Win Rate: {profile.win_rate:.1f}%")
    if profile.matches is not None:
        lines.append(f"🎮 Matches: {profile.matches}")
    return "\n".join(lines)


# ---------- .help ----------

def text_help(prefix: str) -> str:
    p = prefix
    return (
        "📌 Commands:\n"
        f"{p}ping\n"
        f"{p}addlist <command> || <response>\n"
        f"{p}addlist <command> (then send response)\n"
        f"{p}commands (list all)\n"
        f"{p}dellist <command>\n"
        f"{p}stalk <userId> <zoneId>\n"
        f"{p}help\n\n"
        f"➡️ And you can use custom commands like {p}hello, {p}bye, etc."
    )
