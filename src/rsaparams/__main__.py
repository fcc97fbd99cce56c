"""The Command Line Interface for converting, completing, generating and inspecting RSA key blobs.

Typical usage example:

    rsaparams convert -i key.pem --from PKCS8 -o key.der --to PKCS1_PRIV
    rsaparams convert -i key.der --from PKCS1_PRIV -o key.pub --to X509_SPKI --pem
    rsaparams generate -o key.pem --keysize 3072 --pem
    python -m rsaparams info -i key.der --from PKCS1_PRIV
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsaparams
from rsaparams import keys
from rsaparams import selector
from rsaparams.params import variant_name


class HelpData(typing.NamedTuple):
    description: str
    choices: list[str] | None = None
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "convert": HelpData("Re-encode a key blob into another blob type."),
    "generate": HelpData("Generate a new key pair with the host cryptographic library."),
    "info": HelpData("Show the kind and size of a key blob."),
    "input": HelpData("Location of the source key file. PEM armor is detected automatically."),
    "output": HelpData("Location of the destination key file."),
    "source": HelpData("Blob type of the source key file.", choices=list(selector.FORMATTERS)),
    "target": HelpData("Blob type of the destination key file.", choices=list(selector.FORMATTERS), default="PKCS8"),
    "complete": HelpData("Recover missing CRT components of a private key before encoding."),
    "pem": HelpData("Write PEM armor instead of raw bytes. DER blob types only."),
    "keysize": HelpData("Key size (in bits).", choices=["2048", "3072", "4096"], default="3072"),
    "pub_exponent": HelpData("Exponent for the public key.", default=65537),
    "overwrite": HelpData("Overwrite the destination file if it exists."),
    "verbose": HelpData("Enable debug logging."),
}

source = argparse.ArgumentParser(add_help=False)
source.add_argument("--input", "-i", type=pathlib.Path, required=True, help=help_dict["input"].description)
source.add_argument("--from",
                    dest="source",
                    type=str.upper,
                    choices=help_dict["source"].choices,
                    required=True,
                    help=help_dict["source"].description)
target = argparse.ArgumentParser(add_help=False)
target.add_argument("--output", "-o", type=pathlib.Path, required=True, help=help_dict["output"].description)
target.add_argument("--to",
                    dest="target",
                    type=str.upper,
                    choices=help_dict["target"].choices,
                    default=help_dict["target"].default,
                    help=help_dict["target"].description)
target.add_argument("--pem", action="store_true", help=help_dict["pem"].description)
target.add_argument("--overwrite", action="store_true", help=help_dict["overwrite"].description)

corep = argparse.ArgumentParser(prog="rsaparams")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsaparams.__version__}")
corep.add_argument("--verbose", action="store_true", help=help_dict["verbose"].description)
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

convert = commands.add_parser("convert", parents=[source, target], help=help_dict["convert"].description)
convert.add_argument("--complete", action="store_true", help=help_dict["complete"].description)
generate = commands.add_parser("generate", parents=[target], help=help_dict["generate"].description)
generate.add_argument("--keysize",
                      choices=help_dict["keysize"].choices,
                      default=help_dict["keysize"].default,
                      help=help_dict["keysize"].description)
generate.add_argument("--pub-exponent",
                      type=int,
                      default=help_dict["pub_exponent"].default,
                      help=help_dict["pub_exponent"].description)
info = commands.add_parser("info", parents=[source], help=help_dict["info"].description)


def load_blob(file: pathlib.Path, blob_type: str) -> bytes:
    """Read a key file, removing PEM armor if present."""
    data = file.read_bytes()
    if data.lstrip().startswith(b"-----BEGIN"):
        return keys.unarmor(keys.pem_text(data), blob_type)
    return data


def store_blob(file: pathlib.Path, blob_type: str, blob: bytes, pem: bool) -> None:
    if pem:
        keys.write_pem(file, blob_type, blob)
    else:
        file.write_bytes(blob)


def main(argv: list[str] | None = None) -> int:
    """Command line entry point. Returns the process exit status."""
    args = corep.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    output = getattr(args, "output", None)
    if output is not None and output.exists() and not args.overwrite:
        print(f"Destination {output} already exists! Use --overwrite to replace it.", file=sys.stderr)
        return 1
    try:
        match args.subcommand:
            case "convert":
                params = keys.decode(load_blob(args.input, args.source), args.source)
                blob = keys.encode(params, args.target, complete=args.complete)
                store_blob(output, args.target, blob, args.pem)
            case "generate":
                params = keys.create_key_pair(int(args.keysize), args.pub_exponent)
                store_blob(output, args.target, keys.encode(params, args.target), args.pem)
            case "info":
                params = keys.decode(load_blob(args.input, args.source), args.source)
                print(f"Key type: {variant_name(params)}")
                print(f"Key size: {params.key_size} bits")
    except rsaparams.RsaParamsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
