# cryptoguard

A small command-line tool and library that encrypts and decrypts files with
AES-256-CBC using a password, and computes SHA-256 checksums of files.

The key and IV are derived from the password with one round of the
`EVP_BytesToKey` scheme, using SHA-256 and the fixed salt `12345678`. The
ciphertext is PKCS#7 padded. Any tool that derives the key and IV the same
way can decrypt the files.

## Installation

```
pip install .
```

## Command line

```
cryptoguard --command encrypt --input plain.txt --output secret.bin --password password
cryptoguard --command decrypt --input secret.bin --output plain.txt --password password
cryptoguard --command checksum --input plain.txt
```

The same entry point can be run as `python -m cryptoguard.cli`.

Options:

| Option | Short | Meaning |
| --- | --- | --- |
| `--help` | `-h` | print the allowed options |
| `--command` | `-c` | `encrypt`, `decrypt` or `checksum` (required) |
| `--input` | `-i` | path to the input file (required) |
| `--output` | `-o` | path to the output file |
| `--password` | `-p` | password for encryption and decryption |

Rules:

- `--command` and `--input` are always required, even together with `--help`.
- `encrypt` and `decrypt` need both `--output` and `--password`.
- `checksum` takes neither `--output` nor `--password`.
- The input and output paths must be different.

With `--help` the tool prints the option list and then no command is run;
it reports `Error: Unsupported command` and exits with status 1.

On success the tool prints `File encoded successfully`,
`File decoded successfully` or `Checksum: <hex digest>` and exits with
status 0. On failure it prints `Error: <message>` to standard error and
exits with status 1.

## Library

```python
import io

from cryptoguard.context import CryptoGuardCtx

password = "password"
ctx = CryptoGuardCtx()

encrypted = io.BytesIO()
ctx.encrypt_file(io.BytesIO(b"Test data for encryption."), encrypted, password)

decrypted = io.BytesIO()
encrypted.seek(0)
ctx.decrypt_file(encrypted, decrypted, password)
assert decrypted.getvalue() == b"Test data for encryption."

print(ctx.calculate_checksum(io.BytesIO(b"Test data for encryption.")))
# 9aa2b2c0d1ed2fa5dea5b3af401e4a9046a02288dd1461865e4329912f1a758d
```

`cryptoguard.context` provides:

- `CryptoGuardCtx` with `encrypt_file(source, target, password)`,
  `decrypt_file(source, target, password)` and `calculate_checksum(source)`,
  working on binary file-like objects; the password may be `str` or `bytes`.
- `derive_cipher_params(password)`, returning an `AesCipherParams` with the
  32-byte `key` and 16-byte `iv`.
- `CryptoGuardError`, raised on failures: the same object passed as source
  and target, a closed or unusable stream, read or write errors, and a wrong
  password or corrupted data, which shows up as `Cipher final error.` when
  decrypting.

`cryptoguard.options` parses the command line on its own:
`ProgramOptions().parse(argv)` fills `command` (a `Command` member),
`input_file`, `output_file` and `password`, and raises `OptionsError` on
invalid input. `help_text()` returns the option list.

## Running the tests

```
pip install ".[test]"
pytest
```