# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""CyberGuard CLI."""

from __future__ import annotations

import argparse
import getpass
import json
import sys
from collections.abc import Callable
from typing import Any

from ..config import ClientSettings, load_settings
from ..errors import CyberGuardError
from ..http.client import HttpClient
from ..log import setup_logging
from ..models.common import Reaction, reaction_counts
from ..models.post import POST_TYPES, Post, PostDraft
from ..models.report import INCIDENT_TYPES, REPORTER_ROLES, SEVERITIES, Report, ReportSubmission
from ..models.user import RegistrationForm, User
from ..notify import CollectingSink, describe_error
from ..runtime import CyberGuard


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cyberguard",
        description="CyberGuard client: anonymous incident reports, community forum and moderation",
    )
    parser.add_argument("--json", action="store_true", help="Output JSON instead of human-friendly text")
    parser.add_argument("--api-url", help="Override the API base URL (default: $CYBERGUARD_API_URL)")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for local/self-signed backends)",
    )
    parser.add_argument("--log-level", help="Logging level (default: $CYBERGUARD_LOG_LEVEL or WARNING)")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and store the session")
    login.add_argument("username")
    login.add_argument("--password", help="Password (prompted when omitted)")
    commands.add_parser("logout", help="End the stored session")
    commands.add_parser("whoami", help="Show the logged-in user")
    register = commands.add_parser("register", help="Create an account")
    register.add_argument("username")
    register.add_argument("email")
    register.add_argument("--password", help="Password (prompted twice when omitted)")

    posts = commands.add_parser("posts", help="Community forum").add_subparsers(dest="action", required=True)
    posts.add_parser("list", help="List forum posts")
    show = posts.add_parser("show", help="Show one post with its comments")
    show.add_argument("post_id")
    create = posts.add_parser("create", help="Create a post")
    create.add_argument("--type", required=True, choices=POST_TYPES)
    create.add_argument("--content", required=True)
    create.add_argument("--tags", default="", help="Comma-separated tags")
    create.add_argument("--advice", action="store_true", help="Ask the community for advice")
    create.add_argument("--public", action="store_true", help="Post under your username")
    like = posts.add_parser("like", help="Toggle your like on a post")
    like.add_argument("post_id")
    comment = posts.add_parser("comment", help="Comment on a post")
    comment.add_argument("post_id")
    comment.add_argument("text")
    reply = posts.add_parser("reply", help="Reply to a comment")
    reply.add_argument("post_id")
    reply.add_argument("comment_id")
    reply.add_argument("text")
    react = posts.add_parser("react", help="React to a post with an emoji")
    react.add_argument("post_id")
    react.add_argument("emoji")
    flag = posts.add_parser("flag", help="Flag a post for moderator review")
    flag.add_argument("post_id")
    flag.add_argument("--reason", default="Inappropriate content")
    delete = posts.add_parser("delete", help="Delete a post (admin)")
    delete.add_argument("post_id")
    delete_comment = posts.add_parser("delete-comment", help="Delete a comment")
    delete_comment.add_argument("post_id")
    delete_comment.add_argument("comment_id")

    reports = commands.add_parser("reports", help="Incident reports").add_subparsers(dest="action", required=True)
    submit = reports.add_parser("submit", help="Submit an anonymous incident report")
    submit.add_argument("--type", required=True, dest="incident_type", choices=INCIDENT_TYPES)
    submit.add_argument("--platform", required=True)
    submit.add_argument("--description", required=True)
    submit.add_argument("--role", required=True, choices=REPORTER_ROLES)
    submit.add_argument("--severity", default="medium", choices=SEVERITIES)
    submit.add_argument("--evidence", default="")
    submit.add_argument("--date", help="Incident date (YYYY-MM-DD, default today)")
    submit.add_argument("--title", default="")
    submit.add_argument("--named", action="store_true", help="Do not submit anonymously")
    reports.add_parser("list", help="List reports (admin)")
    reports.add_parser("flagged", help="List flagged reports (admin)")
    for name, help_text in (("flag", "Flag a report"), ("delete", "Delete a report")):
        sub = reports.add_parser(name, help=help_text)
        sub.add_argument("report_id")
    report_react = reports.add_parser("react", help="React to a report")
    report_react.add_argument("report_id")
    report_react.add_argument("emoji")
    for name, help_text in (("progress", "Record progress on a report"), ("update", "Add an update to a report")):
        sub = reports.add_parser(name, help=help_text)
        sub.add_argument("report_id")
        sub.add_argument("message")

    admin = commands.add_parser("admin", help="Moderation tools").add_subparsers(dest="action", required=True)
    admin.add_parser("stats", help="Dashboard counters")
    admin.add_parser("flagged-posts", help="List flagged posts")
    admin_delete = admin.add_parser("delete-post", help="Delete a flagged post")
    admin_delete.add_argument("post_id")
    admin.add_parser("users", help="List users")
    for name, help_text in (("promote", "Promote a user to admin"), ("delete-user", "Delete a user")):
        sub = admin.add_parser(name, help=help_text)
        sub.add_argument("user_id")
    create_admin = admin.add_parser("create-admin", help="Create an admin account")
    create_admin.add_argument("username")
    create_admin.add_argument("email")
    create_admin.add_argument("--password", help="Password (prompted twice when omitted)")

    chat = commands.add_parser("chat", help="Ask the support chatbot")
    chat.add_argument("message")
    return parser


def _print_json(data: Any) -> None:
    if isinstance(data, list):
        payload = [item.to_dict() if hasattr(item, "to_dict") else item for item in data]
    else:
        payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True, ensure_ascii=False)
    sys.stdout.write("\n")


def _format_reactions(reactions: list[Reaction]) -> str:
    counts = reaction_counts(reactions)
    return " ".join(f"{emoji}{count}" for emoji, count in counts.items())


def _pretty_post(post: Post, *, full: bool = False) -> None:
    markers = []
    if post.flagged:
        markers.append("FLAGGED")
    if post.advice_requested:
        markers.append("advice requested")
    suffix = f" [{', '.join(markers)}]" if markers else ""
    print(f"[{post.id}] ({post.type}){suffix}")
    print(f"  {post.content}")
    if post.tags:
        print(f"  Tags: {', '.join('#' + tag for tag in post.tags)}")
    reactions = _format_reactions(post.reactions)
    print(f"  {post.like_count} likes, {len(post.comments)} comments{'  ' + reactions if reactions else ''}")
    if not full:
        return
    for comment in post.comments:
        print(f"    - [{comment.id}] {comment.username or 'anonymous'}: {comment.text}")
        for reply in comment.replies:
            print(f"        > [{reply.id}] {reply.username or 'anonymous'}: {reply.text}")


def _pretty_report(report: Report) -> None:
    flag = " [FLAGGED]" if report.flagged else ""
    title = f" {report.title}" if report.title else ""
    print(f"[{report.id}] {report.type}/{report.severity} ({report.status}){flag}{title}")
    print(f"  {report.description}")
    if report.platform:
        print(f"  Platform: {report.platform}")
    reactions = _format_reactions(report.reactions)
    if reactions:
        print(f"  Reactions: {reactions}")
    for update in report.updates:
        print(f"    * {update.message}")


def _pretty_user(user: User) -> None:
    email = f" <{user.email}>" if user.email else ""
    print(f"[{user.id}] {user.username}{email} ({user.role})")


def _pretty_print(data: Any) -> None:
    if data is None:
        return
    items = data if isinstance(data, list) else [data]
    if isinstance(data, list) and not data:
        print("Nothing to show.")
        return
    for item in items:
        if isinstance(item, Post):
            _pretty_post(item, full=not isinstance(data, list))
        elif isinstance(item, Report):
            _pretty_report(item)
        elif isinstance(item, User):
            _pretty_user(item)
        elif isinstance(item, dict):
            for key, value in item.items():
                print(f"{key}: {value}")
        else:
            print(item)


def _prompt_password(confirm: bool) -> tuple[str, str | None]:
    password = getpass.getpass("Password: ")
    if not confirm:
        return password, None
    return password, getpass.getpass("Confirm password: ")


def _registration(args: argparse.Namespace) -> RegistrationForm:
    if args.password is not None:
        password, confirm = args.password, args.password
    else:
        password, confirm = _prompt_password(confirm=True)
    return RegistrationForm(username=args.username, email=args.email, password=password, confirm_password=confirm)


Handler = Callable[[CyberGuard, argparse.Namespace], Any]


def _login(guard: CyberGuard, args: argparse.Namespace) -> Any:
    password = args.password if args.password is not None else _prompt_password(confirm=False)[0]
    return guard.session.login(args.username, password)


def _logout(guard: CyberGuard, _args: argparse.Namespace) -> Any:
    guard.session.logout()
    return "Logged out."


def _whoami(guard: CyberGuard, _args: argparse.Namespace) -> Any:
    return guard.session.require_user()


def _register(guard: CyberGuard, args: argparse.Namespace) -> Any:
    return guard.session.register(_registration(args))


def _posts(guard: CyberGuard, args: argparse.Namespace) -> Any:
    store = guard.posts
    action = args.action
    if action == "list":
        return store.posts if store.fetch() else None
    if action == "show":
        return store.load(args.post_id)
    if action == "create":
        draft = PostDraft(
            type=args.type,
            content=args.content,
            tags=args.tags,
            advice_requested=args.advice,
            is_anonymous=not args.public,
        )
        return store.create(draft)
    if action == "like":
        liked = store.toggle_like(args.post_id)
        return None if liked is None else True
    if action == "comment":
        return store.add_comment(args.post_id, args.text)
    if action == "reply":
        return store.add_reply(args.post_id, args.comment_id, args.text)
    if action == "react":
        return store.react(args.post_id, args.emoji)
    if action == "flag":
        return store.flag(args.post_id, args.reason)
    if action == "delete":
        return store.delete(args.post_id)
    if action == "delete-comment":
        return store.delete_comment(args.post_id, args.comment_id)
    raise ValueError(f"Unknown posts action: {action}")


def _reports(guard: CyberGuard, args: argparse.Namespace) -> Any:
    store = guard.reports
    action = args.action
    if action == "submit":
        submission = ReportSubmission(
            incident_type=args.incident_type,
            platform=args.platform,
            description=args.description,
            your_role=args.role,
            severity=args.severity,
            evidence=args.evidence,
            anonymous=not args.named,
            title=args.title,
        )
        if args.date:
            submission.date = args.date
        return store.submit(submission)
    if action == "list":
        return store.reports if store.fetch() else None
    if action == "flagged":
        return store.flagged if store.fetch_flagged() else None
    if action == "flag":
        return store.flag(args.report_id)
    if action == "delete":
        return store.delete(args.report_id)
    if action == "react":
        return store.react(args.report_id, args.emoji)
    if action == "progress":
        return store.update_progress(args.report_id, args.message)
    if action == "update":
        return store.add_update(args.report_id, args.message)
    raise ValueError(f"Unknown reports action: {action}")


def _admin(guard: CyberGuard, args: argparse.Namespace) -> Any:
    store = guard.moderation
    action = args.action
    if action == "stats":
        return store.load_dashboard()
    if action == "flagged-posts":
        return store.flagged_posts if store.fetch_flagged_posts() else None
    if action == "delete-post":
        return store.delete_post(args.post_id)
    if action == "users":
        return store.users if store.fetch_users() else None
    if action == "promote":
        return store.promote(args.user_id)
    if action == "delete-user":
        return store.delete_user(args.user_id)
    if action == "create-admin":
        return store.create_admin(_registration(args))
    raise ValueError(f"Unknown admin action: {action}")


def _chat(guard: CyberGuard, args: argparse.Namespace) -> Any:
    return guard.chatbot.send_message(args.message).response


HANDLERS: dict[str, Handler] = {
    "login": _login,
    "logout": _logout,
    "whoami": _whoami,
    "register": _register,
    "posts": _posts,
    "reports": _reports,
    "admin": _admin,
    "chat": _chat,
}


def run(guard: CyberGuard, args: argparse.Namespace, sink: CollectingSink) -> int:
    """Dispatch one parsed command; returns the process exit code."""
    try:
        result = HANDLERS[args.command](guard, args)
    except CyberGuardError as exc:
        print(f"Error: {describe_error(exc, 'Request failed')}", file=sys.stderr)
        return 1

    failed = result is None or result is False
    for notification in sink.drain():
        prefix = "Error: " if notification.is_error else ""
        print(f"{prefix}{notification.title}: {notification.description}", file=sys.stderr)
        failed = failed or notification.is_error

    if failed:
        return 1
    if result is not True:
        if args.json:
            _print_json(result)
        else:
            _pretty_print(result)
    return 0


def main(argv: list[str] | None = None, *, http_client: HttpClient | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ClientSettings = load_settings()
    if args.api_url:
        settings.base_url = args.api_url.rstrip("/")
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    sink = CollectingSink()
    with CyberGuard(http_client, settings=settings, sink=sink) as guard:
        guard.start()
        return run(guard, args, sink)


if __name__ == "__main__":
    raise SystemExit(main())
