import pytest

from xpay_payments import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    MissingCredentialError,
    create_client,
    load_client_config,
)
from xpay_payments.core.environment import build_environment, detect_environment, load_env_file


pytestmark = pytest.mark.unit

BASE = {"XPAY_API_KEY": "sk_live_abc", "XPAY_MERCHANT_ID": "merchant_1"}


class TestClientConfig:
    def test_missing_api_key(self):
        with pytest.raises(MissingCredentialError) as excinfo:
            ClientConfig(api_key="", merchant_id="m")
        assert excinfo.value.code == "MISSING_API_KEY"

    def test_missing_merchant_id(self):
        with pytest.raises(MissingCredentialError) as excinfo:
            ClientConfig(api_key="sk_sandbox_x", merchant_id="")
        assert excinfo.value.code == "MISSING_MERCHANT_ID"

    def test_missing_credential_is_a_config_error(self):
        assert issubclass(MissingCredentialError, ConfigError)

    def test_defaults(self):
        config = ClientConfig(api_key="sk_sandbox_x", merchant_id="m")
        assert config.base_url == "https://server.xpay-bits.com"
        assert config.timeout_seconds == 30.0
        assert config.environment == "sandbox"

    def test_explicit_environment_wins_over_prefix(self):
        config = ClientConfig(api_key="sk_live_x", merchant_id="m", environment="sandbox")
        assert config.environment == "sandbox"

    def test_invalid_environment(self):
        with pytest.raises(ConfigError):
            ClientConfig(api_key="sk_live_x", merchant_id="m", environment="staging")

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigError):
            ClientConfig(api_key="sk_live_x", merchant_id="m", timeout_seconds=0)

    def test_base_url_trailing_slash_is_stripped(self):
        config = ClientConfig(api_key="k", merchant_id="m", base_url="https://api.test/")
        assert config.base_url == "https://api.test"

    def test_merchant_path(self):
        config = ClientConfig(api_key="k", merchant_id="m_1")
        assert config.merchant_path("payments", "pay_1") == "/v1/api/merchants/m_1/payments/pay_1"


class TestDetectEnvironment:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("xpay_sandbox_1", "sandbox"),
            ("pk_sandbox_1", "sandbox"),
            ("sk_sandbox_1", "sandbox"),
            ("xpay_live_1", "live"),
            ("pk_live_1", "live"),
            ("sk_live_1", "live"),
            ("something_else", "sandbox"),
        ],
    )
    def test_prefixes(self, key, expected):
        assert detect_environment(key) == expected


class TestLoadClientConfig:
    def test_from_base_mapping(self):
        config = load_client_config(env_file=None, base=BASE)
        assert config.api_key == "sk_live_abc"
        assert config.merchant_id == "merchant_1"
        assert config.environment == "live"

    def test_keyword_arguments_win(self):
        config = load_client_config(
            env_file=None,
            base=BASE,
            overrides={"XPAY_MERCHANT_ID": "from_override"},
            merchant_id="from_kwarg",
            timeout_seconds=5,
        )
        assert config.merchant_id == "from_kwarg"
        assert config.timeout_seconds == 5.0

    def test_parameters_bundle(self):
        config = load_client_config(
            env_file=None,
            base={},
            parameters=ClientParameters(api_key="k", merchant_id="m", environment="LIVE"),
        )
        assert config.environment == "live"

    def test_env_file_fills_gaps_only(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "export XPAY_API_KEY='sk_sandbox_file'\n"
            'XPAY_MERCHANT_ID="file_merchant"\n'
            "XPAY_BASE_URL=https://file.test\n"
            "not a pair\n",
            encoding="utf-8",
        )
        config = load_client_config(
            env_file=str(env_file), base={"XPAY_MERCHANT_ID": "base_merchant"}
        )
        assert config.api_key == "sk_sandbox_file"
        assert config.merchant_id == "base_merchant"
        assert config.base_url == "https://file.test"

    def test_missing_env_file_is_ignored(self, tmp_path):
        config = load_client_config(env_file=str(tmp_path / "absent.env"), base=BASE)
        assert config.merchant_id == "merchant_1"

    def test_missing_key_raises(self):
        with pytest.raises(MissingCredentialError):
            load_client_config(env_file=None, base={"XPAY_MERCHANT_ID": "m"})

    def test_bad_timeout(self):
        with pytest.raises(ConfigError):
            load_client_config(env_file=None, base=BASE, timeout_seconds="soon")


class TestEnvironmentHelpers:
    def test_build_environment_layers(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("A=file\nB=file\n", encoding="utf-8")
        env = build_environment(env_file=str(env_file), base={"A": "base"}, overrides={"B": "over"})
        assert env.get("A") == "base"
        assert env.get("B") == "over"
        assert env.get("C", "default") == "default"

    def test_load_env_file_keeps_existing(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("A=file\nB=file\n", encoding="utf-8")
        target = {"A": "existing"}
        merged = load_env_file(str(env_file), environ=target)
        assert merged == {"A": "existing", "B": "file"}


class TestCreateClient:
    def test_rejects_config_with_parameters(self, config):
        with pytest.raises(ValueError):
            create_client(config=config, api_key="other")

    def test_builds_from_parameters(self, session):
        client = create_client(
            env_file=None, base={}, api_key="sk_sandbox_k", merchant_id="m", session=session
        )
        assert client.merchant_id == "m"
        assert client.transport.session is session
