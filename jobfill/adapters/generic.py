from jobfill.adapters.base import SiteAdapter


class GenericAdapter(SiteAdapter):
    """Any page: the generic detector as is."""

    platform = "generic"


# Recognized platforms without dedicated rules yet; detection is generic
class SmartRecruitersAdapter(SiteAdapter):
    platform = "smartrecruiters"
    hosts = ("smartrecruiters.com",)
    markers = ("div.careers-application-container", 'form[data-automation-id="application-form"]')


class BambooHRAdapter(SiteAdapter):
    platform = "bamboohr"
    hosts = ("bamboohr.com",)
    markers = ("div.BambooHR-ATS-Jobs-ViewController",)


class SuccessFactorsAdapter(SiteAdapter):
    platform = "successfactors"
    hosts = ("successfactors.com", "successfactors.eu")
    markers = ("div.recruiting-application",)
