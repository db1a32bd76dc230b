"""
Developeer - Peer Review Exchange
=================================

Authors publish versioned question sets ("forms") for their projects and
spend credit to request reviews; reviewers earn credit by answering them.

Collections:
- users: account, credit balance, owned forms, reviews given
- forms: author-owned, append-only question-set versions
- reviews: responses to one specific form version
- credit_transactions: audit trail of every credit movement

None of the multi-collection writes are transactional. Each one is run as a
saga (see services/saga.py) and reports the step index it failed at.
"""

__version__ = "1.0.0"
__product__ = "Developeer"
