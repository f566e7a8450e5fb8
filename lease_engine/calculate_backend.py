"""
Lease Calculation Backend API
Stateless JSON wrappers around the lease calculation engine
"""

from flask import Blueprint, request, jsonify, current_app
from decimal import InvalidOperation
from typing import List, Optional
import logging

from lease_engine.lease_accounting import (
    LeaseTerms,
    SubleaseTerms,
    EscalationRule,
    LeaseAccountMapping,
    generate_payment_schedule,
    generate_sublease_income_schedule,
    lease_payment_stream,
    generate_asc842_schedule,
    generate_initial_journal_entries,
    generate_monthly_journal_entry,
)
from lease_engine.lease_accounting.core.models import entries_to_dicts

# Create blueprint
calc_bp = Blueprint('calc', __name__, url_prefix='/api')

logger = logging.getLogger(__name__)

# Payload problems that map to 400 rather than 500
PAYLOAD_ERRORS = (ValueError, KeyError, TypeError, InvalidOperation)


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _parse_escalations(data: dict) -> List[EscalationRule]:
    rows = data.get('escalations') or []
    if not isinstance(rows, list):
        raise ValueError("'escalations' must be a list")
    if not all(isinstance(row, dict) for row in rows):
        raise ValueError("Each escalation must be an object")
    return [EscalationRule.from_dict(row) for row in rows]


def _parse_lease(data: dict) -> LeaseTerms:
    lease = data['lease']
    if not isinstance(lease, dict):
        raise ValueError("'lease' must be an object")
    return LeaseTerms.from_dict(lease)


def _account_mapping(data: dict) -> LeaseAccountMapping:
    mapping: Optional[dict] = data.get('account_mapping')
    if mapping is None:
        mapping = current_app.config.get('LEASE_ACCOUNT_MAPPING')
    elif not isinstance(mapping, dict):
        raise ValueError("'account_mapping' must be an object")
    return LeaseAccountMapping.from_dict(mapping)


def _bad_request(e: Exception):
    message = f"Missing field: {e}" if isinstance(e, KeyError) else str(e) or e.__class__.__name__
    logger.warning(f"⚠️  Rejected calculation request: {message}")
    return jsonify({'error': message}), 400


@calc_bp.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@calc_bp.route('/payment_schedule', methods=['POST'])
def payment_schedule():
    """Month-by-month lessee payment schedule"""
    try:
        data = _payload()
        terms = _parse_lease(data)
        escalations = _parse_escalations(data)
    except PAYLOAD_ERRORS as e:
        return _bad_request(e)

    try:
        entries = generate_payment_schedule(terms, escalations)
        logger.info(f"📅 Generated {len(entries)} payment schedule rows")
        return jsonify({'entries': entries_to_dicts(entries)})
    except Exception as e:
        logger.exception(f"❌ Error in payment_schedule: {e}")
        return jsonify({'error': str(e)}), 500


@calc_bp.route('/sublease_schedule', methods=['POST'])
def sublease_schedule():
    """Month-by-month sublease income schedule"""
    try:
        data = _payload()
        sublease = data['sublease']
        if not isinstance(sublease, dict):
            raise ValueError("'sublease' must be an object")
        terms = SubleaseTerms.from_dict(sublease)
        escalations = _parse_escalations(data)
    except PAYLOAD_ERRORS as e:
        return _bad_request(e)

    try:
        entries = generate_sublease_income_schedule(terms, escalations)
        logger.info(f"📅 Generated {len(entries)} sublease income rows")
        return jsonify({'entries': entries_to_dicts(entries)})
    except Exception as e:
        logger.exception(f"❌ Error in sublease_schedule: {e}")
        return jsonify({'error': str(e)}), 500


@calc_bp.route('/asc842_schedule', methods=['POST'])
def asc842_schedule():
    """
    ASC 842 amortization schedule and summary
    Escalations and abatement flow into the lease payments through the payment schedule
    """
    try:
        data = _payload()
        terms = _parse_lease(data)
        escalations = _parse_escalations(data)
    except PAYLOAD_ERRORS as e:
        return _bad_request(e)

    try:
        result = generate_asc842_schedule(terms, lease_payment_stream(terms, escalations))
        if result is None:
            logger.info("ℹ️  No ASC 842 data: discount rate or lease term not set")
            return jsonify({'summary': None, 'schedule': []})

        logger.info(f"✅ ASC 842 schedule: {len(result.schedule)} periods, "
                    f"liability={result.summary.initial_lease_liability:,.2f}")
        return jsonify(result.to_dict())
    except Exception as e:
        logger.exception(f"❌ Error in asc842_schedule: {e}")
        return jsonify({'error': str(e)}), 500


@calc_bp.route('/journal_entries', methods=['POST'])
def journal_entries():
    """Initial recognition entries plus one entry per amortization period"""
    try:
        data = _payload()
        terms = _parse_lease(data)
        escalations = _parse_escalations(data)
        accounts = _account_mapping(data)
    except PAYLOAD_ERRORS as e:
        return _bad_request(e)

    try:
        payments = lease_payment_stream(terms, escalations)
        initial = generate_initial_journal_entries(terms, accounts, payments)
        result = generate_asc842_schedule(terms, payments)
        monthly = []
        if result is not None:
            monthly = [generate_monthly_journal_entry(row, terms.classification, accounts)
                       for row in result.schedule]

        logger.info(f"📝 Generated {len(initial)} initial and {len(monthly)} monthly journal entries")
        return jsonify({
            'initial_entries': entries_to_dicts(initial),
            'monthly_entries': entries_to_dicts(monthly),
        })
    except Exception as e:
        logger.exception(f"❌ Error in journal_entries: {e}")
        return jsonify({'error': str(e)}), 500
