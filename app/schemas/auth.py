from pydantic import BaseModel


class VerifiedIdentity(BaseModel):
    """
    Identity recovered from a successfully verified token.

    Only app.utils.security.verify_identity_token builds one of these. Request
    bodies never carry an identity field, so an email claimed by a client can
    not be passed where a VerifiedIdentity is expected.
    """
    email: str
    uid:   str

    model_config = {"frozen": True}
