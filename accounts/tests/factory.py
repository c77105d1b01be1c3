import factory

from accounts.models import Role, User

PASSWORD = "password123"


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        django_get_or_create = ("email",)

    email = factory.Sequence(lambda n: f"business{n}@example.com")
    name = factory.Sequence(lambda n: f"User {n}")
    role = Role.BUSINESS
    password = factory.django.Password(PASSWORD)


class AdminUserFactory(UserFactory):
    email = factory.Sequence(lambda n: f"admin{n}@example.com")
    role = Role.ADMIN
    is_staff = True
