"""Tests for the site adapter overlay and adapter selection."""

import pytest

from jobfill.adapters.factory import select_adapter
from jobfill.adapters.generic import GenericAdapter, SmartRecruitersAdapter
from jobfill.adapters.greenhouse import GreenhouseAdapter
from jobfill.adapters.lever import LeverAdapter
from jobfill.adapters.workday import WorkdayAdapter, categorize_automation_id
from jobfill.config import settings
from jobfill.core.field_classifier import FieldClassifier
from jobfill.core.form_detector import detect_fields
from jobfill.core.pattern_catalog import PATTERN_CATALOG, extend_catalog


GREENHOUSE_PAGE = """
<form id="application_form">
  <div class="field" id="first_name_field">
    <label for="first_name">First Name <span class="asterisk">*</span></label>
    <input type="text" id="first_name" name="job_application[first_name]">
  </div>
  <div class="field">
    <label for="question_1">What is your current salary?</label>
    <input type="text" id="question_1">
  </div>
</form>
"""

LEVER_PAGE = """
<div class="application-form">
  <div class="application-field field-name">
    <div class="application-label">Full name</div>
    <input type="text" name="name">
  </div>
  <div class="application-field">
    <div class="application-label">LinkedIn URL</div>
    <input type="text" name="urls[LinkedIn]">
  </div>
</div>
"""

WORKDAY_PAGE = """
<div data-automation-id="legalNameSection_firstName">
  <label data-automation-id="formLabel">Given Name</label>
  <input type="text" id="input-1">
</div>
<div data-automation-id="addressSection">
  <input type="text" id="input-2" data-automation-id="addressSection_city">
</div>
<div>
  <label for="color">Favorite color</label>
  <input id="color" name="color">
</div>
"""


class TestGreenhouse:
    def test_standard_field_overlay(self):
        fields = GreenhouseAdapter().detect_fields(GREENHOUSE_PAGE)
        first = fields[0]

        assert (first.category, first.subcategory) == ("personal", "firstName")
        assert first.confidence == 1.0
        assert first.metadata.extensions["greenhouse_field_id"] == "first_name_field"
        assert first.metadata.extensions["is_required"] == "true"
        assert first.metadata.required is True

    def test_generic_categorization_with_structure_boost(self):
        fields = GreenhouseAdapter().detect_fields(GREENHOUSE_PAGE)
        salary = fields[1]

        assert (salary.category, salary.subcategory) == ("other", "salary")
        assert salary.confidence == pytest.approx(0.95)

    def test_overlay_returns_new_field(self):
        baseline = detect_fields(GREENHOUSE_PAGE)[1]
        enhanced = GreenhouseAdapter().enhance(baseline)

        assert enhanced is not baseline
        assert enhanced.field_handle is baseline.field_handle
        assert baseline.confidence == 0.8
        assert baseline.metadata.extensions == {}

    def test_field_without_wrapper_unchanged(self):
        field = detect_fields("<form><label for='e'>Email</label><input id='e'></form>")[0]
        assert GreenhouseAdapter().enhance(field) is field

    def test_matches(self):
        assert GreenhouseAdapter.matches(None, "https://boards.greenhouse.io/acme/jobs/1")
        assert GreenhouseAdapter.matches(GREENHOUSE_PAGE, "")
        assert not GreenhouseAdapter.matches("<form></form>", "https://example.com")


class TestLever:
    def test_full_name_field(self):
        name = LeverAdapter().detect_fields(LEVER_PAGE)[0]

        assert (name.category, name.subcategory) == ("personal", "name")
        assert name.metadata.extensions["lever_field_type"] == "application-field field-name"
        assert name.confidence == 1.0

    def test_url_fields(self):
        linkedin = LeverAdapter().detect_fields(LEVER_PAGE)[1]

        assert (linkedin.category, linkedin.subcategory) == ("other", "linkedin")
        assert linkedin.confidence == pytest.approx(0.85)

    def test_matches(self):
        assert LeverAdapter.matches(None, "https://jobs.lever.co/acme/123/apply")
        assert LeverAdapter.matches(LEVER_PAGE, "")


class TestWorkday:
    def test_automation_fields_first_then_generic(self):
        fields = WorkdayAdapter().detect_fields(WORKDAY_PAGE)
        assert [f.metadata.id for f in fields] == ["input-1", "input-2", "color"]

    def test_automation_id_classification(self):
        fields = WorkdayAdapter().detect_fields(WORKDAY_PAGE)
        first, city = fields[0], fields[1]

        assert (first.category, first.subcategory) == ("personal", "firstName")
        assert first.metadata.label_text == "given name"
        assert first.metadata.extensions["workday_automation_id"] == "legalnamesection_firstname"
        assert first.confidence == pytest.approx(0.7)

        assert (city.category, city.subcategory) == ("personal", "city")
        assert city.metadata.extensions["workday_field_type"] == ""

    def test_each_control_once(self):
        fields = WorkdayAdapter().detect_fields(WORKDAY_PAGE)
        handles = [id(f.field_handle) for f in fields]
        assert len(handles) == len(set(handles))

    def test_generic_field_untouched(self):
        color = WorkdayAdapter().detect_fields(WORKDAY_PAGE)[2]
        assert "workday_automation_id" not in color.metadata.extensions

    def test_shared_container_labels_stay_with_their_controls(self):
        page = """
        <div data-automation-id="myInfoSection">
          <label data-automation-id="formLabel">Email</label>
          <input type="text" id="input-1">
          <label data-automation-id="formLabel">Phone</label>
          <input type="text" id="input-2">
          <label data-automation-id="formLabel">City</label>
          <input type="text" id="input-3">
        </div>
        """
        fields = WorkdayAdapter().detect_fields(page)

        assert [(f.metadata.label_text, f.subcategory) for f in fields] == [
            ("email", "email"),
            ("phone", "phone"),
            ("city", "city"),
        ]
        assert [f.subcategory for f in fields] == [f.subcategory for f in detect_fields(page)]

    def test_bound_label_kept(self):
        page = """
        <div data-automation-id="myInfoSection">
          <label for="a" data-automation-id="formLabel">Email</label>
          <input type="text" id="a">
          <label for="b" data-automation-id="formLabel">Phone</label>
          <input type="text" id="b">
        </div>
        """
        fields = WorkdayAdapter().detect_fields(page)

        assert [(f.metadata.label_text, f.metadata.label_for_field, f.subcategory) for f in fields] == [
            ("email", True, "email"),
            ("phone", True, "phone"),
        ]

    def test_label_of_earlier_control_not_reused(self):
        page = """
        <div data-automation-id="myInfoSection">
          <label data-automation-id="formLabel">Phone</label>
          <input type="text" id="input-1">
          <input type="text" id="input-2" placeholder="City">
        </div>
        """
        second = WorkdayAdapter().detect_fields(page)[1]
        generic = detect_fields(page)[1]

        assert second.metadata.label_text == generic.metadata.label_text

    @pytest.mark.parametrize("aid,expected", [
        ("email", ("personal", "email")),
        ("phone-number", ("personal", "phone")),
        ("legalnamesection_lastname", ("personal", "lastName")),
        ("addresssection_postalcode", ("personal", "zipCode")),
        ("education-school", ("education", "school")),
        ("education-gpa", ("education", "gpa")),
        ("jobhistory-title", ("experience", "title")),
        ("skills-input", ("skills", "skills")),
        ("veteranstatus", ("other", "veteranStatus")),
        ("submit-button", None),
    ])
    def test_automation_rules(self, aid, expected):
        assert categorize_automation_id(aid) == expected

    def test_matches(self):
        assert WorkdayAdapter.matches(None, "https://acme.wd5.myworkdayjobs.com/en-US/careers")
        assert WorkdayAdapter.matches(WORKDAY_PAGE, "")


class TestFactory:
    def test_greenhouse_by_markup(self):
        assert isinstance(select_adapter(GREENHOUSE_PAGE), GreenhouseAdapter)

    def test_lever_by_url(self):
        assert isinstance(select_adapter("<form></form>", "https://jobs.lever.co/acme"), LeverAdapter)

    def test_workday_checked_first(self):
        page = WORKDAY_PAGE + "<form id='application_form'></form>"
        assert isinstance(select_adapter(page), WorkdayAdapter)

    def test_other_platforms(self):
        adapter = select_adapter("<form></form>", "https://jobs.smartrecruiters.com/Acme/1")
        assert isinstance(adapter, SmartRecruitersAdapter)
        assert adapter.platform == "smartrecruiters"

    def test_generic_fallback(self):
        adapter = select_adapter("<form></form>", "https://example.com")
        assert type(adapter) is GenericAdapter

    def test_site_adapters_switched_off(self, monkeypatch):
        monkeypatch.setattr(settings, "enable_site_adapters", False)
        assert type(select_adapter(GREENHOUSE_PAGE)) is GenericAdapter

    def test_classifier_is_injected(self):
        classifier = FieldClassifier(extend_catalog(PATTERN_CATALOG, "other", "pronouns", ["pronouns"]))
        adapter = select_adapter(GREENHOUSE_PAGE, classifier=classifier)
        assert adapter.classifier is classifier

        page = "<form><label for='p'>Pronouns</label><input id='p'></form>"
        field = adapter.detect_fields(page)[0]
        assert field.subcategory == "pronouns"
