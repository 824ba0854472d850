from snapdi_identity.domain.account.aggregates.account import Account, account_has_role

__all__ = ["Account", "account_has_role"]
