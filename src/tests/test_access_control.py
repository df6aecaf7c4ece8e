"""Ownership policies and the owner_field system check."""

from __future__ import annotations

import uuid
from io import StringIO
from types import SimpleNamespace

from django.contrib.auth.models import AnonymousUser
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase

from access_control.checks import check_views_declare_owner_field
from access_control.permissions import IsOwnerOrAdmin
from access_control.policies import can_modify, ensure_can_modify, is_admin, is_owner
from articles.views import ArticleViewSet
from core.errors import Forbidden
from users.views import UserViewSet


def principal(role="USER"):
    return SimpleNamespace(id=uuid.uuid4(), is_authenticated=True, is_admin=role == "ADMIN")


class PolicyTests(SimpleTestCase):
    def setUp(self):
        self.owner = principal()
        self.stranger = principal()
        self.admin = principal("ADMIN")

    def test_owner_matches_by_id_regardless_of_type(self):
        self.assertTrue(is_owner(self.owner, str(self.owner.id)))
        self.assertFalse(is_owner(self.stranger, self.owner.id))
        self.assertFalse(is_owner(AnonymousUser(), self.owner.id))
        self.assertFalse(is_owner(self.owner, None))

    def test_admin_needs_authentication(self):
        self.assertTrue(is_admin(self.admin))
        self.assertFalse(is_admin(self.owner))
        self.assertFalse(is_admin(AnonymousUser()))
        self.assertFalse(is_admin(None))

    def test_admin_bypass_is_opt_in(self):
        self.assertTrue(can_modify(self.owner, self.owner.id))
        self.assertFalse(can_modify(self.admin, self.owner.id))
        self.assertTrue(can_modify(self.admin, self.owner.id, admin_bypass=True))
        self.assertFalse(can_modify(self.stranger, self.owner.id, admin_bypass=True))

    def test_ensure_can_modify_raises_forbidden(self):
        ensure_can_modify(self.owner, self.owner.id)
        with self.assertRaises(Forbidden) as ctx:
            ensure_can_modify(self.stranger, self.owner.id, message="Not yours.")
        self.assertEqual(str(ctx.exception.detail), "Not yours.")


class OwnerFieldCheckTests(SimpleTestCase):
    def test_guarded_view_without_owner_field_is_reported(self):
        class Unlabelled:
            permission_classes = [IsOwnerOrAdmin]

        class Unguarded:
            permission_classes = []

        errors = check_views_declare_owner_field([Unlabelled, Unguarded])

        self.assertEqual([error.id for error in errors], ["access_control.E001"])
        self.assertIs(errors[0].obj, Unlabelled)

    def test_project_views_pass(self):
        self.assertEqual(check_views_declare_owner_field([ArticleViewSet, UserViewSet]), [])


class SystemCheckTests(TestCase):
    def test_system_checks_pass(self):
        call_command("check", stdout=StringIO())
