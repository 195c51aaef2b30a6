import pytest
import sys
from pathlib import Path

# Add the repository root to sys.path so dto_generator imports without install
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from dto_generator.codegen.core.config import GenerationConfig, DiscoveryMode
from dto_generator.codegen.core.naming import NamingStyle


USER_SOURCE = """\
class User {
  final String name;
  final int? age;
}
"""

PROFILE_SOURCE = """\
import 'package:equatable/equatable.dart';

enum Count { one, two, three }

class Profile extends Equatable {
  final String userName;
  final Count count; // Type: enum
  final Address address;
  final Address? billingAddress;
  final DateTime createdAt; // Parsing: DateTime.parse(value), value.toIso8601String()

  const Profile({
    required this.userName,
    required this.count,
    required this.address,
    this.billingAddress,
    required this.createdAt,
  });
}
"""

MULTI_SOURCE = """\
import 'package:meta/meta.dart';

class Address {
  final String street;
  final String? city;
}

class Marker {
  void describe() {}
}

class Order {
  final int id;
  final Address? shipping;
}
"""


@pytest.fixture
def user_source():
    """Minimal class with one required and one nullable field."""
    return USER_SOURCE


@pytest.fixture
def profile_source():
    """Equatable class with enum, nested and custom-parsed fields."""
    return PROFILE_SOURCE


@pytest.fixture
def multi_source():
    """Three classes; the middle one declares no fields."""
    return MULTI_SOURCE


@pytest.fixture
def single_config():
    """Single-class config with DTO suffix and original naming."""
    return GenerationConfig(suffix="DTO", naming_style=NamingStyle.ORIGINAL)


@pytest.fixture
def multi_config():
    """Multi-class config with DTO suffix and snake_case keys."""
    return GenerationConfig(
        suffix="DTO",
        naming_style=NamingStyle.SNAKE_CASE,
        discovery_mode=DiscoveryMode.MULTI,
    )
