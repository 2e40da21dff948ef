from lodgebook.schemas.mess.mess_fee import MessFeeConfig

__all__ = ["MessFeeConfig"]
