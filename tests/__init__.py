"""Test suite for hdfs-shell."""
