"""Namespace annotation keys maintained by the self-service portal."""


class SSPAnnotations:
    """Annotation keys stored on project namespaces."""

    BILLING = "openshift.io/kontierung-element"
    REQUESTER = "openshift.io/requester"
    MEGA_ID = "openshift.io/MEGAID"
    TEST_PROJECT_DELETION_DAYS = "openshift.io/testproject-daystodeletion"
    DESCRIPTION = "openshift.io/description"

    @staticmethod
    def test_project_description(deletion_days: int) -> str:
        """Human-readable expiry notice shown on test projects."""
        return f"Dieses Testprojekt wird in {deletion_days} Tagen automatisch gelöscht!"

    @classmethod
    def test_project_annotations(cls, deletion_days: int) -> dict[str, str]:
        """Annotations marking a project for automatic deletion."""
        return {
            cls.TEST_PROJECT_DELETION_DAYS: str(deletion_days),
            cls.DESCRIPTION: cls.test_project_description(deletion_days),
        }
