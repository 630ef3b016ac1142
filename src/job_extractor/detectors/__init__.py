"""Heuristic detectors for the role, company and salary of a job page."""

from job_extractor.detectors.company_detector import CompanyDetector
from job_extractor.detectors.numeric import parse_number
from job_extractor.detectors.role_detector import RoleDetector
from job_extractor.detectors.salary_detector import SalaryDetector

__all__ = ["CompanyDetector", "RoleDetector", "SalaryDetector", "parse_number"]
