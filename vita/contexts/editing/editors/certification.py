"""Certifications section editor."""

from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.editors.base import ListSectionEditor


class CertificationEditor(ListSectionEditor):
    """
    Certificates and licences.

    Items: name, issuer, date, expirationDate, noExpiration, credentialID,
    credentialURL, description. noExpiration=True clears expirationDate.
    """

    block_type = BlockType.CERTIFICATION
    REQUIRED_FIELDS = ("name", "issuer")
    ITEM_PLACEHOLDER = "New Certification"
    ITEM_TITLE_FIELD = "name"

    def set_no_expiration(self, index: int, no_expiration: bool = True):
        """Mark a certificate as non-expiring (clears its expiration date)."""
        return self.update_item_field(index, "noExpiration", no_expiration)
