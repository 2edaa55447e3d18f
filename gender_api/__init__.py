from gender_api.genderException import GenderException, ConfigurationError, ValidationError, ApiError
from gender_api.supportedCountries import SUPPORTED_COUNTRIES, is_supported_country
from gender_api.genderHandler import GenderRequest, GenderHandler
from gender_api.genderWrapperAsync import GenderWrapperAsync

__all__ = [
    "GenderException", "ConfigurationError", "ValidationError", "ApiError",
    "SUPPORTED_COUNTRIES", "is_supported_country",
    "GenderRequest", "GenderHandler", "GenderWrapperAsync",
]
