"""stack-bootstrap — bring up the ELK + Fleet compose stack and wait for readiness."""
