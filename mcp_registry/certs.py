"""Self-signed TLS credentials for serving the registry over HTTPS locally."""
import datetime
import ipaddress
import logging
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from .config import settings

logger = logging.getLogger(__name__)

KEY_FILE = "key.pem"
CERT_FILE = "cert.pem"
VALIDITY_DAYS = 365


def generate_self_signed_cert(certs_dir: Path, common_name: str = "localhost",
                              key_size: int = 4096) -> tuple[Path, Path]:
    """Writes a private key and a self-signed certificate for local HTTPS.

    Args:
        certs_dir: Directory receiving key.pem and cert.pem, created if missing.
        common_name: Subject common name, also added as a DNS subject alternative name.
        key_size: RSA key size in bits.

    Returns:
        The paths of the key and certificate files.
    """
    certs_dir.mkdir(parents=True, exist_ok=True)
    key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)

    subject = x509.Name([
        x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
        x509.NameAttribute(NameOID.STATE_OR_PROVINCE_NAME, "State"),
        x509.NameAttribute(NameOID.LOCALITY_NAME, "City"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Organization"),
        x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "OrgUnit"),
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
    ])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(subject)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=VALIDITY_DAYS))
        .add_extension(
            x509.SubjectAlternativeName([
                x509.DNSName(common_name),
                x509.IPAddress(ipaddress.ip_address("127.0.0.1")),
            ]),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )

    key_path = certs_dir / KEY_FILE
    cert_path = certs_dir / CERT_FILE
    key_path.write_bytes(key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ))
    key_path.chmod(0o600)
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return key_path, cert_path


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    certs_dir = settings.certs_dir
    logger.info(f"Generating self-signed certificate for localhost in {certs_dir}")
    key_path, cert_path = generate_self_signed_cert(certs_dir)
    logger.info(f"SSL certificates written to {key_path} and {cert_path}")


if __name__ == "__main__":
    main()
