from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query

from joblit.exceptions import InvalidInputError
from joblit.models.user import User, UserType
from joblit.schema.user_schema import EmployerProfile, SeekerProfile
from tests.support import PASSWORD, DatabaseTestCase


class TestRegistration(DatabaseTestCase):

    def test_register_then_authenticate_seeker(self):
        self.assertTrue(self.accounts.register(self.seeker_candidate("alice", full_name="Alice A")))

        user = self.accounts.authenticate("alice", PASSWORD)

        self.assertIsNotNone(user)
        self.assertEqual(user.type, UserType.SEEKER)
        self.assertIsInstance(user.profile, SeekerProfile)
        self.assertEqual(user.profile.full_name, "Alice A")
        self.assertEqual(user.profile.skills, "welding, forklift")
        self.assertEqual(user.email, "alice@x.com")

    def test_register_then_authenticate_employer(self):
        self.assertTrue(self.accounts.register(self.employer_candidate("acme", company_name="Acme")))

        user = self.accounts.authenticate("acme", PASSWORD)

        self.assertEqual(user.type, UserType.EMPLOYER)
        self.assertIsInstance(user.profile, EmployerProfile)
        self.assertEqual(user.profile.company_name, "Acme")

    def test_other_variant_columns_are_null(self):
        self.register_employer("acme")
        self.register_seeker("alice")

        with self.database.session() as db:
            employer = db.query(User).filter(User.username == "acme").one()
            seeker = db.query(User).filter(User.username == "alice").one()

        self.assertIsNone(employer.full_name)
        self.assertIsNone(employer.skills)
        self.assertIsNone(employer.resume_info)
        self.assertIsNone(seeker.company_name)

    def test_password_is_not_stored_in_plain_text(self):
        self.register_seeker("alice")
        with self.database.session() as db:
            stored = db.query(User.password_hash).filter(User.username == "alice").scalar()
        self.assertNotEqual(stored, PASSWORD)
        self.assertTrue(stored.startswith("$2"))

    def test_duplicate_username_fails_and_keeps_first_row(self):
        self.register_seeker("alice", full_name="Alice A")

        second = self.seeker_candidate("alice", email="other@x.com", full_name="Impostor")
        self.assertFalse(self.accounts.register(second))

        self.assertEqual(self.count_users(), 1)
        user = self.accounts.authenticate("alice", PASSWORD)
        self.assertEqual(user.profile.full_name, "Alice A")
        self.assertEqual(user.email, "alice@x.com")

    def test_duplicate_email_fails(self):
        self.register_seeker("alice")
        self.assertFalse(self.accounts.register(self.employer_candidate("acme", email="alice@x.com")))
        self.assertEqual(self.count_users(), 1)

    def test_missing_required_fields_are_rejected_before_insert(self):
        cases = [
            self.seeker_candidate("  "),
            self.seeker_candidate("alice", password=""),
            self.seeker_candidate("alice", email=""),
            self.seeker_candidate("alice", email="not-an-email"),
            self.seeker_candidate("alice", email="@."),
            self.seeker_candidate("alice", email="a@b."),
            self.seeker_candidate("alice", full_name=""),
            self.employer_candidate("acme", company_name=None),
            self.seeker_candidate("alice", confirm_password="different"),
        ]
        for candidate in cases:
            with self.subTest(candidate=candidate):
                with self.assertRaises(InvalidInputError):
                    self.accounts.register(candidate)
        self.assertEqual(self.count_users(), 0)

    def test_matching_confirm_password_is_accepted(self):
        self.assertTrue(self.accounts.register(self.seeker_candidate("alice", confirm_password=PASSWORD)))

    def test_register_returns_false_when_store_is_unavailable(self):
        self.database.drop_all()
        with self.assertLogs("joblit.services.account_service", level="ERROR"):
            self.assertFalse(self.accounts.register(self.seeker_candidate("alice")))


class TestAuthentication(DatabaseTestCase):

    def test_wrong_password_and_unknown_user_look_the_same(self):
        self.register_seeker("alice")
        self.assertIsNone(self.accounts.authenticate("alice", "wrong"))
        self.assertIsNone(self.accounts.authenticate("nobody", PASSWORD))

    def test_username_match_is_exact(self):
        self.register_seeker("alice")
        self.assertIsNone(self.accounts.authenticate("alice ", PASSWORD))

    def test_authenticate_returns_none_when_store_is_unavailable(self):
        self.register_seeker("alice")
        self.database.drop_all()
        self.assertIsNone(self.accounts.authenticate("alice", PASSWORD))


class TestProfileEditing(DatabaseTestCase):

    def test_update_seeker_profile(self):
        alice = self.register_seeker("alice")
        edited = alice.model_copy(update={
            "email": "alice@new.com",
            "profile": SeekerProfile(full_name="Alice Archer", skills="tig", resume_info="cv"),
        })

        self.assertTrue(self.accounts.update_profile(edited))

        reloaded = self.accounts.get_user(alice.id)
        self.assertEqual(reloaded.email, "alice@new.com")
        self.assertEqual(reloaded.profile.full_name, "Alice Archer")
        self.assertEqual(reloaded.profile.resume_info, "cv")
        # password untouched when none is given
        self.assertIsNotNone(self.accounts.authenticate("alice", PASSWORD))

    def test_update_changes_password(self):
        acme = self.register_employer("acme")
        self.assertTrue(self.accounts.update_profile(acme, password="newpass"))
        self.assertIsNone(self.accounts.authenticate("acme", PASSWORD))
        self.assertIsNotNone(self.accounts.authenticate("acme", "newpass"))

    def test_update_employer_company_name(self):
        acme = self.register_employer("acme")
        edited = acme.model_copy(update={"profile": EmployerProfile(company_name="Acme Intl")})
        self.assertTrue(self.accounts.update_profile(edited))
        self.assertEqual(self.accounts.get_user(acme.id).profile.company_name, "Acme Intl")

    def test_update_to_taken_email_fails(self):
        self.register_seeker("bob")
        alice = self.register_seeker("alice")
        self.assertFalse(self.accounts.update_profile(alice.model_copy(update={"email": "bob@x.com"})))
        self.assertEqual(self.accounts.get_user(alice.id).email, "alice@x.com")

    def test_update_unknown_id_returns_false(self):
        alice = self.register_seeker("alice")
        self.assertFalse(self.accounts.update_profile(alice.model_copy(update={"id": alice.id + 100})))

    def test_type_cannot_change(self):
        alice = self.register_seeker("alice")
        as_employer = alice.model_copy(update={
            "type": UserType.EMPLOYER,
            "profile": EmployerProfile(company_name="Sneaky"),
        })
        self.assertFalse(self.accounts.update_profile(as_employer))
        self.assertEqual(self.accounts.get_user(alice.id).type, UserType.SEEKER)

    def test_update_rejects_bad_email_and_blank_name(self):
        alice = self.register_seeker("alice")
        for email in ("nope", "@.", "a@b."):
            with self.subTest(email=email):
                with self.assertRaises(InvalidInputError):
                    self.accounts.update_profile(alice.model_copy(update={"email": email}))
        with self.assertRaises(InvalidInputError):
            self.accounts.update_profile(alice.model_copy(update={"profile": SeekerProfile(full_name=" ")}))

    def test_save_resume_only_for_seekers(self):
        alice = self.register_seeker("alice")
        acme = self.register_employer("acme")

        self.assertTrue(self.accounts.save_resume(alice.id, "Ten years welding", "mig, tig"))
        self.assertFalse(self.accounts.save_resume(acme.id, "n/a", "n/a"))

        profile = self.accounts.get_user(alice.id).profile
        self.assertEqual(profile.resume_info, "Ten years welding")
        self.assertEqual(profile.skills, "mig, tig")


class TestProfileDeletion(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.acme = self.register_employer("acme")
        self.globex = self.register_employer("globex")
        self.alice = self.register_seeker("alice")
        self.bob = self.register_seeker("bob")

        self.acme_job = self.post_job(self.acme, title="Welder")
        self.globex_job = self.post_job(self.globex, title="Driver")

        self.applications.apply(self.alice.id, self.acme_job.id)
        self.applications.apply(self.bob.id, self.acme_job.id)
        self.applications.apply(self.bob.id, self.globex_job.id)

    def test_deleting_employer_removes_jobs_and_their_applications(self):
        self.assertTrue(self.accounts.delete_profile(self.acme))

        self.assertIsNone(self.accounts.get_user(self.acme.id))
        self.assertIsNone(self.jobs.get_job(self.acme_job.id))
        self.assertEqual(self.applications.list_applicants(self.acme_job.id), [])
        # unrelated employer, job and application survive
        self.assertIsNotNone(self.jobs.get_job(self.globex_job.id))
        self.assertTrue(self.applications.has_applied(self.bob.id, self.globex_job.id))
        self.assertEqual(self.count_applications(), 1)

    def test_deleting_seeker_removes_only_their_applications(self):
        self.assertTrue(self.accounts.delete_profile(self.bob))

        self.assertIsNone(self.accounts.get_user(self.bob.id))
        self.assertEqual(self.applications.list_applied_jobs(self.bob.id), [])
        self.assertTrue(self.applications.has_applied(self.alice.id, self.acme_job.id))
        self.assertEqual(self.count_jobs(), 2)
        self.assertEqual(self.count_applications(), 1)

    def test_deleting_unknown_user_changes_nothing(self):
        ghost = self.alice.model_copy(update={"id": 9999})
        self.assertFalse(self.accounts.delete_profile(ghost))
        self.assertEqual(self.count_users(), 4)
        self.assertEqual(self.count_applications(), 3)

    def test_deleted_user_can_no_longer_log_in(self):
        self.accounts.delete_profile(self.alice)
        self.assertIsNone(self.accounts.authenticate("alice", PASSWORD))

    def test_delete_returns_false_when_store_is_unavailable(self):
        self.database.drop_all()
        self.assertFalse(self.accounts.delete_profile(self.alice))

    def test_failure_on_user_row_rolls_back_dependent_deletes(self):
        original_delete = Query.delete

        def fail_on_users(query, *args, **kwargs):
            if query.column_descriptions[0]["entity"] is User:
                raise OperationalError("DELETE FROM users", {}, Exception("database is locked"))
            return original_delete(query, *args, **kwargs)

        with patch.object(Query, "delete", autospec=True, side_effect=fail_on_users):
            self.assertFalse(self.accounts.delete_profile(self.acme))

        self.assertIsNotNone(self.accounts.get_user(self.acme.id))
        self.assertEqual(self.count_jobs(), 2)
        self.assertEqual(self.count_applications(), 3)
        self.assertIsNotNone(self.jobs.get_job(self.acme_job.id))
        self.assertEqual(len(self.applications.list_applicants(self.acme_job.id)), 2)
