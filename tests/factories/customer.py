"""Factory for customer payloads."""

from polyfactory.factories.pydantic_factory import ModelFactory

from costumetrack.modules.customers.schemas import CustomerCreate


class CustomerCreateFactory(ModelFactory[CustomerCreate]):
    __model__ = CustomerCreate
    __allow_none_optionals__ = False

    @classmethod
    def name(cls) -> str:
        return cls.__faker__.name()

    @classmethod
    def email(cls) -> str:
        return cls.__faker__.email()

    @classmethod
    def phone(cls) -> str:
        return cls.__faker__.numerify("555-###-####")

    @classmethod
    def company(cls) -> str:
        return cls.__faker__.company()

    @classmethod
    def address(cls) -> str:
        return cls.__faker__.address()

    @classmethod
    def notes(cls) -> str:
        return cls.__faker__.sentence()
