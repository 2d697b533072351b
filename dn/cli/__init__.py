"""Command line interface (`dn`)."""
