# api/survey/routes.py
from flask import current_app, request, jsonify
import logging

from ..base.base_schemas import BaseResponse
from shared.errors import InvalidArgument, SurveyError
from . import survey_bp

logger = logging.getLogger(__name__)


def get_dispatcher():
    return current_app.extensions["survey_dispatcher"]


@survey_bp.route('/notify', methods=['POST'])
def send_survey_notification():
    """Score a completed survey and email the results"""
    data = request.get_json(silent=True)
    if data is None:
        error = InvalidArgument(["Request must be JSON"])
        return jsonify(BaseResponse.from_exception(error).to_json()), error.http_status

    try:
        summary = get_dispatcher().dispatch(data)
    except SurveyError as e:
        return jsonify(BaseResponse.from_exception(e).to_json()), e.http_status

    response = BaseResponse.success(
        data=summary.model_dump(by_alias=True, exclude_none=True, mode="json"),
        message=summary.message
    )
    return jsonify(response.to_json()), 200


@survey_bp.route('/quota', methods=['GET'])
def get_quota_status():
    """Today's email quota usage"""
    try:
        status = get_dispatcher().quota.status()
    except SurveyError as e:
        return jsonify(BaseResponse.from_exception(e).to_json()), e.http_status
    except Exception as e:
        logger.error(f"Error reading quota status: {e}", exc_info=True)
        return jsonify(BaseResponse.error(message="Failed to read quota", errors={"code": "internal"}).to_json()), 500

    return jsonify(BaseResponse.success(data=status.model_dump(), message="Quota retrieved successfully").to_json()), 200
