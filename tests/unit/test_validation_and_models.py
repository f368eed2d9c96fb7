# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import unittest
from datetime import date

from builders import post_payload, report_payload

from cyberguard.errors import ValidationError
from cyberguard.models import Post, PostDraft, RegistrationForm, Report, ReportSubmission, User, has_role, reaction_counts
from cyberguard.models.common import Reaction
from cyberguard.validation import parse_tags, validate_post, validate_registration, validate_report


def _submission(**overrides):
    values = dict(
        incident_type="cyber",
        platform=" Instagram ",
        description="  They keep sharing my photos  ",
        your_role="Target",
    )
    values.update(overrides)
    return ReportSubmission(**values)


class TestValidation(unittest.TestCase):
    def test_report_body_is_trimmed(self):
        body = validate_report(_submission(evidence="  ", title=" Photos "))
        self.assertEqual(body["platform"], "Instagram")
        self.assertEqual(body["description"], "They keep sharing my photos")
        self.assertEqual(body["yourRole"], "target")
        self.assertEqual(body["severity"], "medium")
        self.assertIs(body["anonymous"], True)
        self.assertIs(body["flagged"], False)
        self.assertEqual(body["date"], date.today().isoformat())
        self.assertEqual(body["title"], "Photos")
        self.assertNotIn("evidence", body)

    def test_report_lists_missing_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_report(_submission(platform="", your_role=" "))
        self.assertEqual(ctx.exception.fields, ("platform", "yourRole"))
        self.assertIn("platform, yourRole", ctx.exception.message)

    def test_report_rejects_short_descriptions(self):
        for description in ("short", "   nine chr ", "123456789"):
            with self.subTest(description=description):
                with self.assertRaises(ValidationError) as ctx:
                    validate_report(_submission(description=description))
                self.assertEqual(ctx.exception.fields, ("description",))

    def test_report_rejects_unknown_role_and_severity(self):
        with self.assertRaises(ValidationError):
            validate_report(_submission(your_role="teacher"))
        with self.assertRaises(ValidationError):
            validate_report(_submission(severity="critical"))

    def test_report_restricts_incident_type(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_report(_submission(incident_type="gossip"))
        self.assertEqual(ctx.exception.fields, ("incidentType",))
        self.assertEqual(validate_report(_submission(incident_type=" Cyber "))["incidentType"], "cyber")

    def test_post_and_tags(self):
        body = validate_post(PostDraft(type="Cyber", content=" hello ", tags="a, ,b ,"))
        self.assertEqual(
            body,
            {"type": "cyber", "content": "hello", "tags": ["a", "b"], "adviceRequested": False, "isAnonymous": True},
        )
        self.assertEqual(parse_tags(["x", " ", " y"]), ["x", "y"])
        self.assertEqual(parse_tags(None), [])

        with self.assertRaises(ValidationError) as ctx:
            validate_post(PostDraft(type="", content="  "))
        self.assertEqual(ctx.exception.fields, ("type", "content"))
        with self.assertRaises(ValidationError):
            validate_post(PostDraft(type="gossip", content="hi"))

    def test_registration(self):
        body = validate_registration(RegistrationForm(" sam ", "sam@example.com", "secret1"))
        self.assertEqual(body["username"], "sam")
        with self.assertRaises(ValidationError):
            validate_registration(RegistrationForm("sam", "", "secret1"))


class TestModels(unittest.TestCase):
    def test_post_handles_populated_fields(self):
        payload = post_payload(
            likes=["u1", {"_id": "u2"}],
            comments=[
                {
                    "_id": "c1",
                    "user": {"_id": "u3", "username": "lee"},
                    "text": "stay strong",
                    "replies": [{"_id": "r1", "user": "u1", "text": "thanks"}],
                }
            ],
            reactions=[{"emoji": "❤️", "userId": "u1"}, {"emoji": "❤️", "userId": "u2"}, {"emoji": "👍"}],
        )
        post = Post.from_mapping(payload)

        self.assertEqual(post.id, "p1")
        self.assertEqual(post.likes, ["u1", "u2"])
        self.assertEqual(post.like_count, 2)
        comment = post.find_comment("c1")
        self.assertEqual(comment.username, "lee")
        self.assertEqual(comment.replies[0].user_id, "u1")
        self.assertIsNone(comment.replies[0].username)
        self.assertEqual(reaction_counts(post.reactions), {"❤️": 2, "👍": 1})
        self.assertEqual(post.to_dict()["comments"][0]["replies"][0]["text"], "thanks")

    def test_report_normalizes_status_and_type(self):
        report = Report.from_mapping(dict(report_payload(), status="ARCHIVED", type=None, incidentType="verbal"))
        self.assertEqual(report.status, "pending")
        self.assertEqual(report.type, "verbal")
        self.assertEqual(report.to_dict()["platform"], "Instagram")

        updated = Report.from_mapping(
            dict(report_payload(), updates=[{"_id": "x", "message": "Reviewed", "createdBy": {"_id": "a1"}}])
        )
        self.assertEqual(updated.updates[0].created_by, "a1")

    def test_user_roles(self):
        admin = User.from_mapping({"user": {"id": "1", "username": "a", "role": "admin"}})
        moderator = User.from_mapping({"_id": "2", "username": "m", "isModerator": True})
        regular = User.from_mapping({"_id": "3", "username": "u"})

        self.assertEqual(admin.role, "admin")
        self.assertTrue(admin.has_role("moderator"))
        self.assertTrue(moderator.has_role("moderator"))
        self.assertFalse(moderator.has_role("admin"))
        self.assertTrue(regular.has_role("user"))
        self.assertFalse(regular.has_role("moderator"))
        self.assertFalse(has_role(None, "user"))
        self.assertEqual(
            Reaction.from_mapping({"emoji": "🙏", "username": "x"}).to_dict(),
            {"emoji": "🙏", "userId": None, "username": "x"},
        )


if __name__ == "__main__":
    unittest.main()
